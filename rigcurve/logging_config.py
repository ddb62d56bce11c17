# rigcurve/logging_config.py
# Logger for the ``rigcurve`` namespace. Page scripts call setup_logging on
# every Streamlit rerun, so an unchanged configuration is left alone and a
# changed one closes the handlers it replaces.
import logging
import sys

LOGGER_NAME = "rigcurve"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_active: tuple[int, str | None] | None = None


def _drop_handlers(logger: logging.Logger) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Attach a stdout handler (and a file handler when ``log_file`` is set) once per setting."""
    global _active
    logger = logging.getLogger(LOGGER_NAME)
    if _active == (level, log_file) and logger.handlers:
        return logger

    _drop_handlers(logger)
    fmt = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        logger.addHandler(h)

    logger.setLevel(level)
    logger.propagate = False
    _active = (level, log_file)
    logger.debug("Logging configured (level=%s, file=%s)", logging.getLevelName(level), log_file)
    return logger


def shutdown_logging() -> None:
    """Close and detach every ``rigcurve`` handler."""
    global _active
    _drop_handlers(logging.getLogger(LOGGER_NAME))
    _active = None
