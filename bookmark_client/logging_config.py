"""日志配置"""
import logging
import logging.config
from typing import Optional

from .config import settings

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    初始化日志

    配置了 LOG_FILE 时写入文件，否则输出到 stderr（避免和命令行输出混在 stdout）。
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_file = log_file or settings.LOG_FILE

    if log_file:
        handler = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "filename": log_file,
            "mode": "a",
            "encoding": "utf-8",
        }
    else:
        handler = {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT}
        },
        "handlers": {
            "default": handler
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        },
        "loggers": {
            "bookmark_client": {"level": level},
            "httpx": {"level": "WARNING"},
        }
    })
