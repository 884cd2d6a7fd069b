"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.gifting.driven_adapter.media.local_media_storage_impl import (
    LocalMediaStorageImpl,
)
from src.service.gifting.driven_adapter.notification.console_notification_sender_impl import (
    ConsoleNotificationSenderImpl,
)
from src.service.gifting.driven_adapter.pricing.province_delivery_fee_calculator_impl import (
    ProvinceDeliveryFeeCalculatorImpl,
)
from src.service.gifting.driven_adapter.repo.order_command_repo_impl import OrderCommandRepoImpl
from src.service.gifting.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from src.service.gifting.driven_adapter.repo.otp_verification_repo_impl import (
    OtpVerificationRepoImpl,
)
from src.service.gifting.driven_adapter.repo.safety_alert_repo_impl import SafetyAlertRepoImpl
from src.service.gifting.driven_adapter.repo.security_event_repo_impl import (
    SecurityEventRepoImpl,
)
from src.service.gifting.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.gifting.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.gifting.driven_adapter.repo.user_report_repo_impl import UserReportRepoImpl
from src.service.gifting.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.gifting.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Repositories (stateless - borrow an asyncpg connection per call)
    order_command_repo = providers.Singleton(OrderCommandRepoImpl)
    order_query_repo = providers.Singleton(OrderQueryRepoImpl)
    otp_verification_repo = providers.Singleton(OtpVerificationRepoImpl)
    user_command_repo = providers.Singleton(UserCommandRepoImpl)
    user_query_repo = providers.Singleton(UserQueryRepoImpl)
    user_report_repo = providers.Singleton(UserReportRepoImpl)
    safety_alert_repo = providers.Singleton(SafetyAlertRepoImpl)
    security_event_repo = providers.Singleton(SecurityEventRepoImpl)

    # Outbound services
    notification_sender = providers.Singleton(ConsoleNotificationSenderImpl)
    media_storage = providers.Singleton(LocalMediaStorageImpl)
    delivery_fee_calculator = providers.Singleton(ProvinceDeliveryFeeCalculatorImpl)

    # Auth
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
