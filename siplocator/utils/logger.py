import logging
import os
import sys
from datetime import datetime

LOGGER_NAME = "SIPLocator"


def setup_logger(log_level=logging.DEBUG, console_level=logging.INFO, log_dir="logs"):
    """
    Sets up the SIPLocator logger: full detail to a timestamped file under
    log_dir, a cleaner view on stdout. Pass log_dir=None to skip the file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"sip_locator_{timestamp}.log")

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    return logger


def log_file_path(logger):
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None
