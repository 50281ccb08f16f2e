import sys

from loguru import logger

from runner.utils.settings import Environment, get_settings


def setup_logger() -> None:
    settings = get_settings()
    logger.remove()

    if settings.ENV == Environment.LOCAL:
        # Local logger
        logger.add(
            sys.stdout,
            level=settings.LOG_LEVEL,
            enqueue=True,
            backtrace=True,
            diagnose=True,
            colorize=True,
        )
    else:
        # Structured logger
        logger.add(
            sys.stdout,
            level=settings.LOG_LEVEL,
            enqueue=True,
            backtrace=True,
            diagnose=False,
            serialize=True,
        )


async def teardown_logger() -> None:
    await logger.complete()
