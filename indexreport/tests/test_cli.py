"""Tests for the index report CLI"""

import json
import os
import tempfile
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from indexreport.cli.main import cli
from indexreport.exceptions import NodeUnavailableError
from indexreport.helpers import IndexRecord


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def no_default_config():
    """Never pick up a real ~/.indexreport/config.yml"""
    with patch("indexreport.cli.main.get_default_config_file", return_value=None):
        yield


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_content = """
elasticsearch:
  hosts:
    - es1:9200
  request_timeout: 10

report:
  group: true

logging:
  loglevel: WARNING
"""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(config_content)
        f.flush()
        yield f.name
    os.unlink(f.name)


@pytest.fixture
def mock_es():
    """Patch the Elasticsearch client used by the report action."""
    records = [
        IndexRecord("logs-2024.01.01", "1.5gb", "1.5gb", "100"),
        IndexRecord("logs-2024.01.02", "500mb", "500mb", "50"),
    ]

    def fake_identity(client):
        if client.address.startswith("down"):
            raise NodeUnavailableError("Connection refused")
        return {"name": "node-1", "cluster_name": "prod", "version": "8.13.0"}

    def fake_create(address, request_timeout=30):
        client = MagicMock()
        client.address = address
        return client

    with patch("indexreport.actions.report.create_es_client", side_effect=fake_create) as create, \
            patch("indexreport.actions.report.get_node_identity", side_effect=fake_identity), \
            patch("indexreport.actions.report.get_index_records", return_value=records) as listing:
        yield {"create": create, "listing": listing}


def porcelain_rows(output):
    return [json.loads(line) for line in output.splitlines() if line.startswith("[")]


class TestCLIBasic:
    """Basic CLI tests."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Index Report' in result.output
        assert 'report' in result.output
        assert 'check' in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'index-report' in result.output

    def test_report_help(self, runner):
        result = runner.invoke(cli, ['report', '--help'])
        assert result.exit_code == 0
        assert '--group' in result.output
        assert '--index-pattern' in result.output
        assert '--sort-by' in result.output
        assert '--porcelain' in result.output

    def test_missing_config_file(self, runner):
        result = runner.invoke(cli, ['-c', '/nonexistent/config.yml', 'report'])
        assert result.exit_code != 0


class TestReportCommand:
    """Tests for the report command."""

    def test_no_nodes(self, runner):
        with patch.dict(os.environ, {}, clear=True):
            result = runner.invoke(cli, ['report'])
        assert result.exit_code == 1
        assert 'No nodes configured' in result.output

    def test_nodes_from_command_line(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'es1:9200', '--group', '-p'])

        assert result.exit_code == 0, result.output
        rows = porcelain_rows(result.output)
        assert rows == [[{
            "index": "logs",
            "totalStoreSize": 2.0,
            "primaryStoreSize": 2.0,
            "docCount": 150,
            "server": "es1:9200",
        }]]

    def test_ungrouped_by_default(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'es1:9200', '-p'])

        assert result.exit_code == 0, result.output
        rows = porcelain_rows(result.output)[0]
        assert [r["index"] for r in rows] == ["logs-2024.01.01", "logs-2024.01.02"]

    def test_config_file_options(self, runner, mock_es, temp_config_file):
        result = runner.invoke(cli, ['-c', temp_config_file, 'report', '-p'])

        assert result.exit_code == 0, result.output
        mock_es["create"].assert_called_once_with("es1:9200", request_timeout=10)
        # report.group from the file
        assert porcelain_rows(result.output)[0][0]["index"] == "logs"

    def test_command_line_overrides_config(self, runner, mock_es, temp_config_file):
        result = runner.invoke(cli, [
            '-c', temp_config_file, 'report', '--no-group', '-n', 'es2:9200', '-p',
        ])

        assert result.exit_code == 0, result.output
        mock_es["create"].assert_called_once_with("es2:9200", request_timeout=10)
        assert len(porcelain_rows(result.output)[0]) == 2

    def test_index_pattern(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'es1:9200', '-i', 'logs-*', '-p'])
        assert result.exit_code == 0, result.output
        assert mock_es["listing"].call_args[1]["index_pattern"] == "logs-*"

    def test_invalid_sort(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'es1:9200', '--sort-by', 'age'])
        assert result.exit_code != 0

    def test_one_node_down(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'down:9200', '-n', 'es1:9200', '-p'])
        assert result.exit_code == 0, result.output
        assert len(porcelain_rows(result.output)) == 1

    def test_all_nodes_down(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'down:9200'])
        assert result.exit_code == 1
        assert 'Error:' in result.output

    def test_table_output(self, runner, mock_es):
        result = runner.invoke(cli, ['report', '-n', 'es1:9200', '--group'])
        assert result.exit_code == 0, result.output
        assert 'es1:9200' in result.output
        assert 'logs' in result.output

    def test_dry_run(self, runner, mock_es):
        result = runner.invoke(cli, ['--dry-run', 'report', '-n', 'es1:9200'])
        assert result.exit_code == 0, result.output
        mock_es["listing"].assert_not_called()


class TestCheckCommand:
    """Tests for the check command."""

    def test_check(self, runner):
        with patch("indexreport.actions.check.create_es_client") as create, \
                patch("indexreport.actions.check.get_node_identity") as identity:
            identity.return_value = {"name": "node-1", "cluster_name": "prod", "version": "8.13.0"}
            result = runner.invoke(cli, ['check', '-n', 'es1:9200', '-p'])

        assert result.exit_code == 0, result.output
        assert create.call_args[0][0] == "es1:9200"
        line = [l for l in result.output.splitlines() if l.startswith("{")][0]
        assert json.loads(line)["available"] is True

    def test_check_all_down(self, runner):
        with patch("indexreport.actions.check.create_es_client"), \
                patch("indexreport.actions.check.get_node_identity",
                      side_effect=NodeUnavailableError("Connection refused")):
            result = runner.invoke(cli, ['check', '-n', 'down:9200', '-p'])
        assert result.exit_code == 1
