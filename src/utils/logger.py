import os
import sys

from loguru import logger

FORENSICS_TAG = "[FORENSICS]"


def _is_forensics(record) -> bool:
    return record["message"].startswith(FORENSICS_TAG)


def setup_logger(*, json_logs: bool = False, level: str = "INFO", log_dir: str = "logs") -> None:
    """Configure loguru for the radar.

    Console level controlled by LOG_LEVEL env (default: INFO).
    The main file captures DEBUG; wallet verdicts also go to a separate
    forensics log kept longer for listing decisions that get questioned later.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    logger.add(
        f"{log_dir}/radar_{{time:YYYY-MM-DD}}.log",
        rotation="20 MB",
        retention="7 days",
        compression="gz",
        level="DEBUG",
        serialize=json_logs,
    )
    logger.add(
        f"{log_dir}/forensics_{{time:YYYY-MM-DD}}.log",
        rotation="1 day",
        retention="90 days",
        level="DEBUG",
        filter=_is_forensics,
        serialize=True,
    )
