import logging
import os

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(min_log_level=logging.INFO, logs_dir=None):
    """
    Sets up console logging and, optionally, logging to separate files for each log level.
    Only logs from the specified `min_log_level` and above are emitted.

    Console output goes to stderr so errors end up on the process's diagnostic output.
    When `logs_dir` is given, each level from `min_log_level` up gets its own file
    (``debug.log``, ``info.log``, ...) holding only records of that level.

    :param min_log_level: Minimum log level to log. Defaults to logging.INFO.
    :param logs_dir: Optional directory for the per-level log files.
    :raises PermissionError: If `logs_dir` is not writable.
    """
    # Log files for each level
    log_levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL
    }

    # Create the root logger; previous handlers are dropped so repeated setup does not duplicate output
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # Capture all log levels
    root.handlers.clear()

    log_format = logging.Formatter(LOG_FORMAT)

    if logs_dir:
        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)

        if not os.access(logs_dir, os.W_OK):
            raise PermissionError(f"Cannot write to log directory: {logs_dir}")

        for level_name, level_value in log_levels.items():
            if level_value >= min_log_level:
                log_file = os.path.join(logs_dir, f"{level_name.lower()}.log")
                handler = logging.FileHandler(log_file)
                handler.setLevel(level_value)
                handler.setFormatter(log_format)

                # Add a filter so only logs of this specific level are captured
                handler.addFilter(lambda record, lv=level_value: record.levelno == lv)
                root.addHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(min_log_level)
    console_handler.setFormatter(log_format)
    root.addHandler(console_handler)

    logger.debug(f"Logging is set up. Minimum log level: {logging.getLevelName(min_log_level)}")
