import datetime
import sys

from loguru import logger

from player_profile.config import ProfileConfig, load_profile_config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"


def configure_logging(config: ProfileConfig | None = None) -> None:
    """Route engine logs to stderr and, when a log dir is configured, a rotating file."""
    cfg = config or load_profile_config()

    logger.remove()  # remove default
    logger.add(sys.stderr, level=cfg.log_level, format=LOG_FORMAT)

    if cfg.log_dir is not None:
        cfg.log_dir.mkdir(parents=True, exist_ok=True)
        # Configure rotating logs (1 per day)
        date_str = datetime.date.today().isoformat()
        logger.add(
            cfg.log_dir / f"player_profile_{date_str}.log",
            rotation="1 day",
            retention="14 days",
            compression="zip",
            level=cfg.log_level,
            format=LOG_FORMAT,
        )


def get_logger():
    return logger
