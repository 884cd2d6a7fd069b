from pathlib import Path, PurePosixPath

import anyio

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_media_storage import IMediaStorage


class LocalMediaStorageImpl(IMediaStorage):
    """Writes media below MEDIA_ROOT, which the app serves as static files."""

    def __init__(
        self, *, media_root: str = settings.MEDIA_ROOT, base_url: str = settings.MEDIA_BASE_URL
    ) -> None:
        self.media_root = Path(media_root)
        self.base_url = base_url.rstrip('/')

    @Logger.io
    async def store(self, *, data: bytes, content_type: str, path: str) -> str:
        relative = PurePosixPath(path)
        if relative.is_absolute() or '..' in relative.parts:
            raise ValidationFailedError('path', f'Invalid media path: {path}')

        target = anyio.Path(self.media_root / relative)
        await target.parent.mkdir(parents=True, exist_ok=True)
        await target.write_bytes(data)

        Logger.base.info(f'🖼️  [Media] stored {len(data)} bytes ({content_type}) at {relative}')
        return f'{self.base_url}/{relative}'
