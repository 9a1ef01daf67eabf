"""
Loguru setup shared by Logger.io and Logger.base

One stdout sink (plus an hourly file sink when LOG_TO_FILE is set). Records
from std-logging users such as httpx are forwarded into the same sinks.
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import sys

from loguru import logger as loguru_logger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Keys whose values never reach a sink
SENSITIVE_KEYWORDS = {'email', 'customer_email'}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


io_log_format = (
    f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</> | <lvl>{{level:<8}}</> | '
    f'<c>{{name}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</> | '
    f'{{message}} | <lk>{{extra[{ExtraField.CHAIN_START_TIME}]}}</>'
)

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

loguru_logger.remove()
custom_logger = loguru_logger.bind(
    **{
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }
)
custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level)

if settings.LOG_TO_FILE:
    custom_logger.add(
        f'{LOG_DIR}/booking_{datetime.now():%Y-%m-%d_%H}.log',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        level=min_log_level,
    )


class InterceptHandler(logging.Handler):
    """Forward std-logging records (httpx, anyio) to loguru, minus transport chatter."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(('httpcore', 'asyncio')):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
