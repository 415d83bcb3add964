import logging
from tqdm import tqdm

from . import logger

FORMAT = '%(asctime)s %(levelname)s - %(message)s'
FORMATTER = logging.Formatter(FORMAT, datefmt="%d-%m-%Y %H:%M:%S")


class TqdmLoggingHandler(logging.Handler):
    """Logging handler that writes through `tqdm.write`, so that log lines
    do not break running progress bars."""
    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self.setFormatter(FORMATTER)

    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg)
            self.flush()
        except Exception:
            self.handleError(record)


def use_tqdm_handler(level=logging.INFO):
    """Route the package logger through tqdm while progress bars are shown."""
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.addHandler(TqdmLoggingHandler())
    logger.setLevel(level)
    return logger
