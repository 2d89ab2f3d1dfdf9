"""
Configuration management for the index report.

This module handles loading and validating configuration from YAML files
and environment variables, and configures logging from the result.
"""

import logging
import os
from typing import Any, Optional

import ecs_logging
import yaml

from indexreport.exceptions import ConfigurationError


# Mapping of environment variables to config paths
# Format: ENV_VAR_NAME -> (config_section, config_key)
ENV_MAPPING = {
    # Nodes to report on
    "INDEXREPORT_ES_HOSTS": ("elasticsearch", "hosts"),
    "INDEXREPORT_ES_HOST": ("elasticsearch", "hosts"),  # Singular form
    "INDEXREPORT_ES_TIMEOUT": ("elasticsearch", "request_timeout"),
    # Report options
    "INDEXREPORT_GROUP": ("report", "group"),
    "INDEXREPORT_INDEX_PATTERN": ("report", "index_pattern"),
    "INDEXREPORT_SORT_BY": ("report", "sort_by"),
    # Logging
    "INDEXREPORT_LOG_LEVEL": ("logging", "loglevel"),
    "INDEXREPORT_LOG_FILE": ("logging", "logfile"),
    "INDEXREPORT_LOG_FORMAT": ("logging", "logformat"),
}

LOG_FORMATS = {
    "default": "%(asctime)s %(levelname)s %(name)s - %(message)s",
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
    "logstash": '{"@timestamp": "%(asctime)s", "level": "%(levelname)s", "logger_name": "%(name)s", "message": "%(message)s"}',
}


def _deep_set(config: dict, path: tuple, value) -> None:
    """
    Set a value in a nested dictionary using a path tuple.

    Args:
        config: The dictionary to modify
        path: Tuple of keys representing the path (e.g., ("elasticsearch", "hosts"))
        value: The value to set
    """
    current = config
    for key in path[:-1]:
        if current.get(key) is None:
            current[key] = {}
        current = current[key]
    current[path[-1]] = value


def _parse_env_value(value: str, key: str) -> Any:
    """
    Parse an environment variable value, converting types as needed.

    Args:
        value: The string value from the environment
        key: The config key name (used to determine type)

    Returns:
        The parsed value with appropriate type
    """
    if key == "group":
        return value.lower() in ("true", "1", "yes")

    if key == "request_timeout":
        try:
            return int(value)
        except ValueError:
            return value

    # Comma-separated hosts
    if key == "hosts":
        return [h.strip() for h in value.split(",") if h.strip()]

    return value


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Load configuration from a YAML file and environment variables.

    Environment variables take precedence over file configuration.

    ```yaml
    elasticsearch:
      hosts:
        - http://es1:9200
        - es2:9200
      request_timeout: 30

    report:
      group: true
      index_pattern: "*"
      sort_by: size

    logging:
      loglevel: INFO
      logfile: /path/to/log
      logformat: default
    ```

    Args:
        config_path: Optional path to YAML configuration file.
                     If not provided, only environment variables are used.

    Returns:
        dict: Merged configuration dictionary

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    loggit = logging.getLogger("indexreport.config")
    config = {}

    if config_path:
        loggit.debug("Loading configuration from: %s", config_path)
        try:
            with open(config_path) as f:
                file_config = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}") from e

        if file_config is None:
            loggit.warning("Configuration file is empty: %s", config_path)
        elif not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {config_path}"
            )
        else:
            config = file_config

    for env_var, config_path_tuple in ENV_MAPPING.items():
        value = os.environ.get(env_var)
        if value is not None:
            loggit.debug("Applying environment override: %s", env_var)
            parsed_value = _parse_env_value(value, config_path_tuple[-1])
            _deep_set(config, config_path_tuple, parsed_value)

    return config


def get_elasticsearch_config(config: dict) -> dict:
    """
    Extract the node list and client settings from the full config.

    Accepts both the nested ``elasticsearch.client`` format and the flat
    ``elasticsearch`` format. A single host string is turned into a list.

    Args:
        config: Full configuration dictionary

    Returns:
        dict: Client configuration, possibly empty
    """
    es_config = config.get("elasticsearch") or {}
    client_config = dict(es_config.get("client", es_config))
    hosts = client_config.get("hosts")
    if isinstance(hosts, str):
        client_config["hosts"] = [hosts]
    return client_config


def get_report_config(config: dict) -> dict:
    """Extract the ``report`` section of the config."""
    return dict(config.get("report") or {})


def get_logging_config(config: dict) -> dict:
    """
    Extract logging configuration from the full config.

    Args:
        config: Full configuration dictionary

    Returns:
        dict: Logging configuration with defaults applied
    """
    logging_config = dict(config.get("logging") or {})

    defaults = {
        "loglevel": "INFO",
        "logformat": "default",
    }

    for key, default_value in defaults.items():
        if key not in logging_config:
            logging_config[key] = default_value

    return logging_config


def configure_logging(config: dict) -> None:
    """
    Configure logging based on the configuration.

    The ``ecs`` format uses the ECS formatter; ``default``, ``json`` and
    ``logstash`` are format strings; anything else is used as a custom format.

    Args:
        config: Full configuration dictionary (will extract logging section)
    """
    log_config = get_logging_config(config)

    loglevel = str(log_config.get("loglevel", "INFO")).upper()
    logfile = log_config.get("logfile")
    logformat = log_config.get("logformat", "default")

    level = getattr(logging, loglevel, logging.INFO)

    if logformat == "ecs":
        formatter = ecs_logging.StdlibFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMATS.get(logformat, logformat))

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logger = logging.getLogger("indexreport")
    logger.setLevel(level)
    logger.handlers = handlers

    # The elasticsearch client transport logs every request at INFO
    logging.getLogger("elastic_transport.transport").setLevel(
        max(level, logging.WARNING)
    )


def validate_config(config: dict) -> None:
    """
    Validate that the configuration names at least one node.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: If no usable host list is configured
    """
    es_config = get_elasticsearch_config(config)

    hosts = es_config.get("hosts")
    if not hosts:
        raise ConfigurationError(
            "No nodes configured. Set 'elasticsearch.hosts' in the configuration "
            "file, INDEXREPORT_ES_HOSTS, or pass --node."
        )
    if not isinstance(hosts, list) or not all(isinstance(h, str) and h for h in hosts):
        raise ConfigurationError(
            "Elasticsearch 'hosts' must be a list of node addresses or a single address"
        )
