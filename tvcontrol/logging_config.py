# tvcontrol/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
