import os
import logging
import logging.config


logger = logging.getLogger(__name__)


LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


class Logs:
    def __init__(self, filename, screen=True, debug=False):

        op_mode = "DEBUG" if debug else "INFO"

        dirname = os.path.dirname(filename)
        if dirname:
            os.makedirs(dirname, exist_ok=True)

        handlers = {
            "info_file_handler": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "strict",
                "filename": filename,
                "maxBytes": 10485760,
                "backupCount": 20,
                "encoding": "utf8",
            },
        }

        if screen:
            handlers["default"] = {
                "level": op_mode,
                "class": "logging.StreamHandler",
                "formatter": "colored",
            }

        log_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "strict": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
                },
                "colored": {
                    "()": "colorlog.ColoredFormatter",
                    "fmt": "%(log_color)s%(asctime)s [%(levelname)s]: %(message)s%(reset)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                    "reset": True,
                    "log_colors": LOG_COLORS,
                },
            },
            "handlers": handlers,
            "loggers": {
                "": {
                    "handlers": list(handlers.keys()),
                    "level": "DEBUG",
                    "propagate": True,
                }
            },
        }

        logging.config.dictConfig(log_config)
