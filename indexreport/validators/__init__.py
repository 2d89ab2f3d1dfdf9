"""
Schema validation for the index report.

This module provides voluptuous schemas for validating the options of each
report action.
"""

from voluptuous import Schema

from indexreport import defaults


# Each schema lists the option defaults that apply to that action
ACTION_OPTIONS = {
    'report': [
        defaults.nodes(),
        defaults.group(),
        defaults.index_pattern(),
        defaults.sort_by(),
        defaults.request_timeout(),
        defaults.porcelain(),
    ],
    'check': [
        defaults.nodes(),
        defaults.request_timeout(),
        defaults.porcelain(),
    ],
}


def _build_schema(option_list: list) -> Schema:
    """
    Build a voluptuous Schema from a list of option definitions.

    Each option definition is a dict with a single key (the option name)
    and a validation rule as the value.

    Args:
        option_list: List of option definition dicts

    Returns:
        Schema: A voluptuous Schema that validates all options
    """
    schema_dict = {}
    for option_def in option_list:
        schema_dict.update(option_def)
    return Schema(schema_dict)


REPORT_SCHEMA = _build_schema(ACTION_OPTIONS['report'])
CHECK_SCHEMA = _build_schema(ACTION_OPTIONS['check'])

ACTION_SCHEMAS = {
    'report': REPORT_SCHEMA,
    'check': CHECK_SCHEMA,
}


def validate_options(action: str, options: dict) -> dict:
    """
    Validate options for a given action, applying defaults where appropriate.

    Args:
        action: The name of the action (report, check)
        options: Dictionary of option values to validate

    Returns:
        dict: Validated and normalized options with defaults applied

    Raises:
        voluptuous.Invalid: If validation fails
        KeyError: If the action is not recognized
    """
    if action not in ACTION_SCHEMAS:
        raise KeyError(f"Unknown action: {action}. Valid actions are: {list(ACTION_SCHEMAS.keys())}")

    return ACTION_SCHEMAS[action](options)
