import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s > %(message)s"


def setup_logger(level: int = logging.INFO, name: str = "firefly") -> logging.Logger:
    """
    Configure the package logger.

    Calling it again only changes the level, the handler is added once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(getattr(handler, "_firefly_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._firefly_handler = True
        logger.addHandler(handler)

    return logger


def mask_secret(secret: str | None) -> str:
    """Only the first 4 characters of a secret ever end up in a log line."""
    if not secret:
        return "<none>"
    return secret[:4] + "****"
