# Module for loading and validating configuration
import json
import logging
import constants # Import constants

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config():
    """Returns a fresh configuration dictionary holding only default values."""
    return {
        'user_agent': constants.DEFAULT_USER_AGENT,
        'request_timeout_seconds': constants.DEFAULT_TIMEOUT,
        'relay_url_template': constants.RELAY_URL_TEMPLATE,
        'output_dir': constants.DEFAULT_OUTPUT_DIR,
        'log_file': constants.DEFAULT_LOG_FILE,
        'log_level': constants.DEFAULT_LOG_LEVEL,
    }


def load_config(config_path=None):
    """
    Loads configuration from a JSON file, validates, and sets defaults.
    With no path, the defaults alone are returned. Every key is optional.
    """
    config = default_config()
    if config_path is None:
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            file_config = json.load(f)
    except FileNotFoundError:
        raise # An explicitly requested file must exist
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from config file '{config_path}': {e}") from e

    if not isinstance(file_config, dict):
        raise ValueError(f"Config file '{config_path}' must contain a JSON object.")

    unknown_keys = [key for key in file_config if key not in config]
    if unknown_keys:
        logger.warning(f"Ignoring unknown config keys in '{config_path}': {', '.join(unknown_keys)}")

    for key in config:
        if key in file_config:
            config[key] = file_config[key]

    _validate(config, config_path)
    return config


def _validate(config, config_path):
    """Raises ValueError for values of the wrong type or range."""
    if not isinstance(config['user_agent'], str) or not config['user_agent'].strip():
        raise ValueError(f"Config 'user_agent' in '{config_path}' must be a non-empty string.")

    timeout = config['request_timeout_seconds']
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("Config 'request_timeout_seconds' must be a positive number or null.")

    template = config['relay_url_template']
    if not isinstance(template, str) or template.count('{}') != 1:
        raise ValueError("Config 'relay_url_template' must be a string with exactly one '{}' placeholder.")

    if not isinstance(config['output_dir'], str) or not config['output_dir']:
        raise ValueError("Config 'output_dir' must be a non-empty string.")

    if config['log_file'] is not None and not isinstance(config['log_file'], str):
        raise ValueError("Config 'log_file' must be a string or null.")

    level = config['log_level']
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Config 'log_level' must be one of: {', '.join(VALID_LOG_LEVELS)}.")
    config['log_level'] = level.upper()
