"""
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html

Use cases are not registered here; each one builds itself from these
providers through its `depends` classmethod.
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.driven_adapter.notification.email_notification_service_impl import (
    EmailNotificationServiceImpl,
)
from src.service.ticketing.driven_adapter.qr.qr_code_generator_impl import QrCodeGeneratorImpl
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.ticketing.driving_adapter.scheduler.expiry_sweep_scheduler import (
    ExpirySweepScheduler,
)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    database = providers.Singleton(Database)

    # Not reentrant: one per request or per sweep run
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, session_factory=database.provided.session)

    qr_code_generator = providers.Singleton(QrCodeGeneratorImpl)
    notification_service = providers.Singleton(EmailNotificationServiceImpl)
    jwt_auth = providers.Singleton(JwtAuth)

    expiry_sweep_scheduler = providers.Singleton(
        ExpirySweepScheduler, uow_factory=unit_of_work.provider
    )


container = Container()


def setup() -> None:
    current = container.settings()
    if not current.EMAIL_API_KEY.get_secret_value():
        Logger.base.warning('📭 [Setup] EMAIL_API_KEY not set, outbound email is disabled')


def cleanup() -> None:
    container.reset_singletons()
