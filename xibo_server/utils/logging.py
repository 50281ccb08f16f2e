import re
import sys

from loguru import logger

from xibo_server.utils.config import Environment, get_settings

_SECRET_QUERY = re.compile(r"([?&](?:key|client_secret|access_token)=)[^&\s]+")


def mask_secrets(text: str) -> str:
    """Blank out API keys and tokens carried in URL query strings."""
    return _SECRET_QUERY.sub(r"\1***", text)


def setup_logger() -> None:
    settings = get_settings()
    logger.remove()

    if settings.LOG_FILE:
        logger.debug("Adding File logger")
        logger.add(
            settings.LOG_FILE,
            level=settings.LOG_LEVEL,
            rotation="10 MB",
            retention=5,
            enqueue=True,
            serialize=True,
        )

    if settings.ENV == Environment.LOCAL:
        # MCP stdio transport owns stdout, so local logs go to stderr
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            enqueue=True,
            backtrace=True,
            diagnose=True,
            colorize=True,
        )
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            enqueue=True,
            backtrace=True,
            diagnose=False,
            serialize=True,
        )
