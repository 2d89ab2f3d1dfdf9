"""
Index report CLI entry point

This module provides the ``index-report`` command group.
"""

from pathlib import Path

import click
from click.core import ParameterSource
from voluptuous import Invalid

from indexreport import __version__
from indexreport.config import (
    configure_logging,
    get_elasticsearch_config,
    get_report_config,
    load_config,
    validate_config,
)
from indexreport.constants import SORT_CHOICES
from indexreport.exceptions import ConfigurationError, IndexReportException
from indexreport.validators import validate_options


# Default config file location
DEFAULT_CONFIG_PATH = Path.home() / ".indexreport" / "config.yml"


def get_default_config_file():
    """
    Get the default configuration file path if it exists.

    :returns: Path to ~/.indexreport/config.yml if it exists, None otherwise
    """
    if DEFAULT_CONFIG_PATH.is_file():
        return str(DEFAULT_CONFIG_PATH)
    return None


def given(ctx, name, value):
    """``value`` if it was set on the command line, otherwise None."""
    if ctx.get_parameter_source(name) == ParameterSource.DEFAULT:
        return None
    return value


def build_options(ctx, action, cli_nodes, **cli_options):
    """
    Merge config file, environment and command line options for ``action`` and
    validate them. Command line values win; ``None`` means "not given".
    """
    config = ctx.obj["configdict"]
    if cli_nodes:
        if not config.get("elasticsearch"):
            config["elasticsearch"] = {}
        es_section = config["elasticsearch"]
        es_section.get("client", es_section)["hosts"] = list(cli_nodes)
    validate_config(config)

    es_config = get_elasticsearch_config(config)
    options = {"nodes": list(es_config["hosts"])}
    if "request_timeout" in es_config:
        options["request_timeout"] = es_config["request_timeout"]
    if action == "report":
        report_config = get_report_config(config)
        for key in ("group", "index_pattern", "sort_by"):
            if key in report_config:
                options[key] = report_config[key]
    for key, value in cli_options.items():
        if value is not None:
            options[key] = value

    try:
        return validate_options(action, options)
    except Invalid as e:
        raise ConfigurationError(f"Invalid options: {e}") from e


@click.group()
@click.version_option(version=__version__, prog_name="index-report")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Only check that nodes answer, do not fetch catalogs",
)
@click.pass_context
def cli(ctx, config_path, dry_run):
    """
    Index Report - Elasticsearch index storage report

    Lists document counts and store sizes for the indices on one or more
    nodes, optionally summed per index family (indices that differ only by a
    date-like suffix).

    \b
    Configuration:
      Default config file: ~/.indexreport/config.yml
      Override with: --config /path/to/config.yml

    \b
    Available commands:
      report   Show index sizes per node
      check    Check that each node answers
    """
    ctx.ensure_object(dict)
    ctx.obj["dry_run"] = dry_run

    if config_path is None:
        config_path = get_default_config_file()
        if config_path:
            click.echo(f"Using default config: {config_path}", err=True)

    try:
        config = load_config(config_path)
        ctx.obj["configdict"] = config
        ctx.obj["config_path"] = config_path
        configure_logging(config)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        ctx.exit(1)


@cli.command()
@click.option(
    "-n",
    "--node",
    "nodes",
    multiple=True,
    help="Node address to report on. Repeat for several nodes. Overrides configured hosts.",
)
@click.option(
    "--group/--no-group",
    default=False,
    help="Sum indices that share a family name (name up to the first '-<digits>')",
)
@click.option(
    "-i",
    "--index-pattern",
    type=str,
    default=None,
    help="Only list indices matching this pattern  [default: *]",
)
@click.option(
    "-s",
    "--sort-by",
    type=click.Choice(SORT_CHOICES),
    default=None,
    help="Sort rows by index name, total size or doc count (largest first)",
)
@click.option(
    "-p",
    "--porcelain",
    is_flag=True,
    default=False,
    help="Output one JSON array per node per line (suitable for scripting)",
)
@click.pass_context
def report(ctx, nodes, group, index_pattern, sort_by, porcelain):
    """
    Show document counts and store sizes per node

    Sizes are shown in GB. Nodes are processed in order; a node that cannot
    be reached is reported as a warning and skipped.
    """
    from indexreport.actions import Report

    try:
        options = build_options(
            ctx,
            "report",
            nodes,
            group=given(ctx, "group", group),
            index_pattern=index_pattern,
            sort_by=sort_by,
            porcelain=given(ctx, "porcelain", porcelain),
        )
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        ctx.exit(1)

    action = Report(**options)

    try:
        if ctx.obj["dry_run"]:
            action.do_dry_run()
        else:
            action.do_action()
    except IndexReportException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@cli.command()
@click.option(
    "-n",
    "--node",
    "nodes",
    multiple=True,
    help="Node address to check. Repeat for several nodes. Overrides configured hosts.",
)
@click.option(
    "-p",
    "--porcelain",
    is_flag=True,
    default=False,
    help="Output one JSON object per node per line",
)
@click.pass_context
def check(ctx, nodes, porcelain):
    """
    Check that each node answers and show its name, cluster and version
    """
    from indexreport.actions import Check

    try:
        options = build_options(
            ctx, "check", nodes, porcelain=given(ctx, "porcelain", porcelain)
        )
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        ctx.exit(1)

    action = Check(**options)

    try:
        if ctx.obj["dry_run"]:
            action.do_dry_run()
        else:
            action.do_action()
    except IndexReportException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


if __name__ == "__main__":
    cli()
