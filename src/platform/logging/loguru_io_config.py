"""
Loguru sinks for the ticketing service.

Every record carries the emitting process (`service_context`), the wall time
at which the current decorated call chain started, and the dotted path of the
decorated callable. Standard `logging` output (uvicorn/granian, SQLAlchemy,
httpx) is routed through the same sinks.
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
from functools import lru_cache
import logging
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING
import zoneinfo

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings


# Keys whose values never reach the log output
SENSITIVE_KEYWORDS = {
    'password',
    'token',
    'secret',
    'api_key',
    'authorization',
}

# stdlib loggers that are only noise below INFO
QUIET_LOGGERS = ('aiosqlite', 'asyncio', 'httpcore', 'multipart')

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


@lru_cache(maxsize=1)
def get_service_context() -> str:
    """`<service>@<env>:<pid>`, fixed for the life of the process."""
    return f'{settings.SERVICE_NAME}@{settings.DEPLOY_ENV}:{os.getpid()}'


def access_log_level(message: str) -> str | None:
    """
    Pick a level for a server access line from its status code.

    Format: '127.0.0.1 - "GET /api/ticket/resolve HTTP/1.1" - 200 - 8ms'
    """
    if ' - "' not in message or ' HTTP/' not in message:
        return None

    tail = message.rsplit('"', 1)[-1].split()
    if len(tail) < 2 or tail[0] != '-' or not tail[1].isdigit():
        return None

    status_code = int(tail[1])
    if status_code >= 500:
        return 'CRITICAL'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    return 'SUCCESS' if status_code >= 200 else 'INFO'


def _bound(logger: 'LoguruLogger') -> 'LoguruLogger':
    return logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(QUIET_LOGGERS):
            return

        message = record.getMessage()
        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Walk out of the logging module to report the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path() -> Path:
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    # Hour-stamped in venue time, which is what operators read
    stamp = datetime.now(zoneinfo.ZoneInfo(settings.EVENT_DEFAULT_TIMEZONE)).strftime(
        '%Y-%m-%d_%H'
    )
    return log_dir / f'{settings.LOG_FILE_PREFIX}{stamp}.log'


loguru_logger.remove()
custom_logger = _bound(loguru_logger)

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

if settings.LOG_TO_FILE:
    custom_logger.add(
        str(_log_file_path()),
        format=io_log_format,
        rotation='1 hour',
        retention=f'{settings.LOG_RETENTION_DAYS} days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
