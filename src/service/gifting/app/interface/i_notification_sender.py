from abc import ABC, abstractmethod


class INotificationSender(ABC):
    """Outbound SMS and email sink."""

    @abstractmethod
    async def send_sms(self, *, phone_number: str, message: str) -> None:
        pass

    @abstractmethod
    async def send_email(self, *, email: str, subject: str, body: str) -> None:
        pass
