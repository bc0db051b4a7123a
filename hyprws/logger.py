import logging
import logging.handlers
import os

_LOG_FMT_STDERR = (
    '%(asctime)s %(levelname)s [%(filename)s:%(lineno)d] %(message)s')
_LOG_FMT_SYSLOG = (
    '%(levelname)s [%(filename)s:%(lineno)d] %(message)s')
_SYSLOG_ADDRESS = '/dev/log'

logger = logging.getLogger()
_initialized = False


def init_logger(name: str) -> None:
    global _initialized  # pylint: disable=global-statement
    if _initialized:
        return
    _initialized = True
    stderr_handler = logging.StreamHandler()
    stderr_formatter = logging.Formatter(_LOG_FMT_STDERR)
    stderr_handler.setFormatter(stderr_formatter)
    logger.addHandler(stderr_handler)
    # Containers and some minimal systems have no syslog daemon.
    if not os.path.exists(_SYSLOG_ADDRESS):
        return
    syslog_handler = logging.handlers.SysLogHandler(address=_SYSLOG_ADDRESS)
    syslog_formatter = logging.Formatter(f'{name}: {_LOG_FMT_SYSLOG}')
    syslog_handler.setFormatter(syslog_formatter)
    logger.addHandler(syslog_handler)


def set_level(level_name: str) -> None:
    logger.setLevel(getattr(logging, level_name.upper(), logging.WARNING))
