import logging
import logging.config

INFO_LOGGER = "snippetbox.info"
ERROR_LOGGER = "snippetbox.error"

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "info": {
            "format": "INFO\t%(asctime)s\t%(message)s",
            "datefmt": "%Y/%m/%d %H:%M:%S",
        },
        # Место вызова (файл и строка) нужно для разбора ошибок
        "error": {
            "format": "ERROR\t%(asctime)s\t%(filename)s:%(lineno)d\t%(message)s",
            "datefmt": "%Y/%m/%d %H:%M:%S",
        },
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "formatter": "info",
            "stream": "ext://sys.stdout",
        },
        "stderr": {
            "class": "logging.StreamHandler",
            "formatter": "error",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        INFO_LOGGER: {"handlers": ["stdout"], "level": "INFO", "propagate": True},
        ERROR_LOGGER: {"handlers": ["stderr"], "level": "ERROR", "propagate": True},
    },
}


def setup_logging() -> None:
    """Настройка логгеров info и error"""
    logging.config.dictConfig(LOGGING_CONFIG)


def get_info_logger() -> logging.Logger:
    return logging.getLogger(INFO_LOGGER)


def get_error_logger() -> logging.Logger:
    return logging.getLogger(ERROR_LOGGER)
