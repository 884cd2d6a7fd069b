from abc import ABC, abstractmethod


class IMediaStorage(ABC):
    @abstractmethod
    async def store(self, *, data: bytes, content_type: str, path: str) -> str:
        """
        Persist binary media under a relative path.

        Returns:
            Public URL of the stored object
        """
        pass
