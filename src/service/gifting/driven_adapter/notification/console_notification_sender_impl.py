"""Notification sink that writes outgoing SMS and email to the log instead of a gateway."""

from datetime import datetime, timezone

from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_notification_sender import INotificationSender


class ConsoleNotificationSenderImpl(INotificationSender):
    def __init__(self) -> None:
        self.sent_messages: list[dict] = []  # Kept for inspection in local runs

    async def send_sms(self, *, phone_number: str, message: str) -> None:
        self.sent_messages.append(
            {'channel': 'sms', 'to': phone_number, 'body': message, 'sent_at': datetime.now(timezone.utc)}
        )
        Logger.base.info(f'📱 [SMS] to={phone_number} | {message}')

    async def send_email(self, *, email: str, subject: str, body: str) -> None:
        self.sent_messages.append(
            {
                'channel': 'email',
                'to': email,
                'subject': subject,
                'body': body,
                'sent_at': datetime.now(timezone.utc),
            }
        )
        Logger.base.info(f'📧 [Email] to={email} | subject={subject} | {body}')
