import logging
import os


def configure_logging(default_level="INFO"):
    level_name = os.getenv("DASHBOARD_LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    for noisy in ("urllib3", "requests", "watchdog"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    logging.getLogger("lent").setLevel(level)
