import logging
import sys
from typing import TextIO


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("contract_analyst")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Configure the logger with the specified level and a stream handler.

        Logs go to stdout unless another stream is given. Reconfiguring
        replaces the previous handler.
        """
        cls._logger.setLevel(log_level.upper())
        for existing in list(cls._logger.handlers):
            cls._logger.removeHandler(existing)
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        )
        cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error message with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)
