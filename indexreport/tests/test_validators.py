"""Tests for the index report option schemas"""

import pytest
from voluptuous import Invalid

from indexreport.validators import ACTION_SCHEMAS, validate_options


class TestReportOptions:
    """Tests for the report schema"""

    def test_defaults(self):
        options = validate_options('report', {'nodes': ['es1:9200']})
        assert options == {
            'nodes': ['es1:9200'],
            'group': False,
            'index_pattern': '*',
            'sort_by': None,
            'request_timeout': 30,
            'porcelain': False,
        }

    def test_all_values(self):
        options = validate_options('report', {
            'nodes': ['es1:9200', 'es2:9200'],
            'group': 'yes',
            'index_pattern': 'logs-*',
            'sort_by': 'docs',
            'request_timeout': '15',
            'porcelain': True,
        })
        assert options['group'] is True
        assert options['sort_by'] == 'docs'
        assert options['request_timeout'] == 15

    def test_nodes_required(self):
        with pytest.raises(Invalid):
            validate_options('report', {})

    def test_nodes_not_empty(self):
        with pytest.raises(Invalid):
            validate_options('report', {'nodes': []})

    def test_invalid_sort(self):
        with pytest.raises(Invalid):
            validate_options('report', {'nodes': ['es1:9200'], 'sort_by': 'age'})

    def test_invalid_boolean(self):
        with pytest.raises(Invalid):
            validate_options('report', {'nodes': ['es1:9200'], 'group': 'maybe'})

    def test_unknown_option(self):
        with pytest.raises(Invalid):
            validate_options('report', {'nodes': ['es1:9200'], 'username': 'elastic'})


class TestCheckOptions:
    """Tests for the check schema"""

    def test_defaults(self):
        options = validate_options('check', {'nodes': ['es1:9200']})
        assert options == {'nodes': ['es1:9200'], 'request_timeout': 30, 'porcelain': False}

    def test_group_not_accepted(self):
        with pytest.raises(Invalid):
            validate_options('check', {'nodes': ['es1:9200'], 'group': True})


def test_unknown_action():
    with pytest.raises(KeyError):
        validate_options('delete', {})


def test_schemas_registered():
    assert set(ACTION_SCHEMAS) == {'report', 'check'}
