"""
Logger factory for the ECIES codec and CLI.

Loggers are cached by name and never propagate to the root logger, so an
application embedding the codec only sees ECIES records where it asks for
them. Console output goes to stderr: stdout belongs to the CLI results.
"""

import logging
import sys
from typing import IO, Optional

from ecies_mue.config.ecies_config import ECIES_CONSTANTS


LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class EciesLogger:
    """
    Cached, pre-configured loggers for codec and CLI.
    """

    _loggers = {}

    @staticmethod
    def get_logger(
        name: str = ECIES_CONSTANTS.LOGGER_NAME,
        level: int = ECIES_CONSTANTS.LOG_LEVEL,
        console_output: bool = True,
        stream: Optional[IO[str]] = None,
    ) -> logging.Logger:
        """
        Ottiene o crea un logger configurato.

        Args:
            name: Nome del logger (es. "ECIES", "ECIES_CLI")
            level: Livello minimo di log (default: INFO)
            console_output: Se True, scrive su stderr
            stream: Stream alternativo a stderr (es. io.StringIO)

        Returns:
            Logger configurato; senza output ha solo un NullHandler
        """
        if name in EciesLogger._loggers:
            return EciesLogger._loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        logger.handlers.clear()

        if console_output or stream is not None:
            handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(handler)
        else:
            logger.addHandler(logging.NullHandler())

        EciesLogger._loggers[name] = logger
        return logger

    @staticmethod
    def set_level(name: str, level: int):
        """Changes log level for an existing logger and its handlers."""
        logger = EciesLogger._loggers.get(name)
        if logger is None:
            return
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    @staticmethod
    def clear_cache():
        EciesLogger._loggers.clear()
