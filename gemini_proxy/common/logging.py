"""Loguru日志配置"""

import sys
import uuid
from pathlib import Path

from loguru import logger

REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_REQUEST_ID = "---"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[request_id]}</cyan> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[request_id]} | "
    "{name}:{line} | {message}"
)


def _ensure_request_id(record) -> bool:
    record["extra"].setdefault("request_id", DEFAULT_REQUEST_ID)
    return True


def configure_logging(log_config) -> None:
    """配置Loguru日志系统

    Args:
        log_config: 日志配置对象（LoggingConfig）
    """
    logger.remove()

    log_path = Path(log_config.file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=log_config.level,
        colorize=True,
        filter=_ensure_request_id,
    )
    logger.add(
        str(log_path),
        format=FILE_FORMAT,
        level=log_config.level,
        rotation="10 MB",
        retention="1 day",
        encoding="utf-8",
        backtrace=True,
        diagnose=False,
        filter=_ensure_request_id,
    )

    def exception_handler(exc_type, exc_value, exc_traceback):
        """全局异常处理器"""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.opt(exception=(exc_type, exc_value, exc_traceback)).critical(
            "未捕获的异常"
        )

    sys.excepthook = exception_handler


def generate_request_id() -> str:
    """生成唯一的请求ID

    Returns:
        str: 格式为 req_xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx 的请求ID
    """
    return f"req_{uuid.uuid4()}"


def get_request_id_from_request(request) -> str | None:
    """从请求对象中安全地获取请求ID"""
    state = getattr(request, "state", None)
    return getattr(state, "request_id", None)


def get_logger_with_request_id(request_id: str | None = None):
    """获取绑定了请求ID的日志器实例"""
    return logger.bind(request_id=request_id or DEFAULT_REQUEST_ID)
