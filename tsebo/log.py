"""
Logging setup for the tsebo command-line tools.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by whichever entry point runs.
"""
import logging
import logging.config
from typing import Any, Dict, Optional


FORMATS = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s | %(levelname)-8s | %(name)-28s | %(funcName)-22s:%(lineno)-4d | %(message)s",
}


def setup_logging(level: str = "INFO", format_style: str = "simple", log_file: Optional[str] = None) -> None:
    """
    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_style: 'simple' or 'detailed'
        log_file: also write a rotating log file at this path
    """
    level = (level or "INFO").upper()
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": FORMATS.get(format_style, FORMATS["simple"]),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": FORMATS["detailed"],
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "tsebo": {"level": level, "handlers": ["console"], "propagate": False},
            # pdfminer is very chatty below ERROR
            "pdfminer": {"level": "ERROR"},
        },
    }

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 10485760,
            "backupCount": 3,
            "encoding": "utf8",
        }
        config["loggers"]["tsebo"]["handlers"].append("file")

    logging.config.dictConfig(config)
