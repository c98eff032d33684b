import logging
import os

# third-party loggers that are chatty at INFO on every rerun
QUIET_LOGGERS = ("urllib3", "requests", "streamlit", "watchdog", "fsevents")


def configure_logging():
    level_name = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logging.getLogger("todo_dashboard").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
