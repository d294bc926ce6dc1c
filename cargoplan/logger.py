import logging
import os
from logging.handlers import TimedRotatingFileHandler

from cargoplan.config import LOG_FILE, LOG_LEVEL

logger = logging.getLogger("cargoplan")
logger.setLevel(LOG_LEVEL)

log_dir = os.path.dirname(LOG_FILE)
if log_dir:
    os.makedirs(log_dir, exist_ok=True)

file_handler = TimedRotatingFileHandler(
    filename=LOG_FILE,
    when='midnight',
    interval=1,
    backupCount=7,
    encoding='utf-8'
)

formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
file_handler.setFormatter(formatter)

logger.addHandler(file_handler)
