import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Server loggers that should share the service's handler and format.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class Log:
    """Centralized logging for the lens selector service."""

    _logger: logging.Logger = logging.getLogger("lens_selector")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Attach a single stdout handler to the service and server loggers.

        Safe to call more than once: loggers that already carry a handler are
        only re-levelled.
        """
        level = log_level.upper()
        for logger in (cls._logger, *map(logging.getLogger, _SERVER_LOGGERS)):
            logger.setLevel(level)
            if not logger.handlers:
                handler = logging.StreamHandler(sys.stdout)
                handler.setFormatter(logging.Formatter(_FORMAT))
                logger.addHandler(handler)
            if logger is not cls._logger:
                logger.propagate = False

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
