import logging
import sys


class LoggerFactory:
    _formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d %(levelname)-5s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    @staticmethod
    def _get_log_level(level_str: str) -> int:
        level_mapping = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR
        }
        return level_mapping.get(level_str.lower(), logging.INFO)

    @staticmethod
    def get_console_logger(name: str = "paint_graph", level="warning") -> logging.Logger:
        """Attach a single stderr handler to the package logger and return it."""
        logger = logging.getLogger(name)

        logger.setLevel(LoggerFactory._get_log_level(level))
        logger.handlers.clear()

        console_handler = logging.StreamHandler(stream=sys.stderr)
        console_handler.setFormatter(LoggerFactory._formatter)
        logger.addHandler(console_handler)

        return logger
