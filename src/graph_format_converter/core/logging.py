#!/usr/bin/env python3

import logging
import logging.config

from pythonjsonlogger.json import JsonFormatter

from .config import converter_config


def setup_logging(level: str | None = None):
    """Setup JSON logging configuration"""
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(source_format)s %(target_format)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout"
            }
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level or converter_config.LOG_LEVEL,
                "propagate": False
            },
            "graph_format_converter": {
                "handlers": ["console"],
                "level": level or converter_config.LOG_LEVEL,
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
