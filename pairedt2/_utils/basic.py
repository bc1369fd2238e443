import logging

from tqdm import tqdm


def set_log_level(level, logger_name='pairedt2'):
    """Set the minimum level of messages to be logged

    Parameters
    ----------
    level : str | int
        Level name (``'debug'``, ``'info'``, ``'warning'``, ...; case is
        ignored) or constant from the logging module. Notices are logged at
        ``'warning'``, computation details at ``'debug'``.
    logger_name : str
        Name of the logger for which to set the logging level. The default is
        the pairedt2 logger.
    """
    if isinstance(level, str):
        level = level.upper()
    elif isinstance(level, bool) or not isinstance(level, int):
        raise TypeError(f"{level=}: need int or str")
    # raises ValueError for unknown level names
    logging.getLogger(logger_name).setLevel(level)


class ScreenHandler(logging.StreamHandler):
    "Log handler that writes through tqdm so that messages don't break progress bars"

    def __init__(self):
        logging.StreamHandler.__init__(self)
        self.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    def emit(self, record):
        tqdm.write(self.format(record))
