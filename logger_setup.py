# Module for setting up logging
import logging
import sys
import os

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(log_file=None, level="INFO"):
    """Sets up logging to console and, when a path is given, to a file."""
    log_formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers (setup may run more than once per process)
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)

            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(log_formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Make failure to open log file fatal
            print(f"Error: Could not set up file logging to {log_file}: {e}", file=sys.stderr)
            sys.exit(1)

    # Progress lines go to stderr so stdout stays clean for the saved path
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    root_logger.addHandler(console_handler)

    logging.debug("Logging setup complete.")
