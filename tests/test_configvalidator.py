# Tests for config validation
"""
Test suite for metacap.configvalidator.
"""

import copy
from typing import Any

import pytest

from metacap.configvalidator import ConfigValidationWarning, format_validation_results, group_warnings, validate_config

BASE: dict[str, Any] = {
    'DEFAULT': {
        'input_dir': '.',
        'output_dir': 'output',
        'exts': ['mp4'],
        'excludes': [],
        'timeout': 30,
        'proxy': '',
        'task_limit': 4,
        'debug': False,
    },
    'SOURCES': {
        'AVSOX': {'enabled': True, 'base_url': 'https://avsox.click', 'interval': 1},
        'JAVDB': {'interval': 2},
    },
    'TRANSLATORS': [{'type': 'deepl', 'key': 'abc:fx'}],
}


def _config(**sections: Any) -> dict[str, Any]:
    config = copy.deepcopy(BASE)
    config.update(sections)
    return config


def _messages(warnings: list[ConfigValidationWarning]) -> str:
    return '\n'.join(str(w) for w in warnings)


class TestStructure:
    def test_valid(self):
        assert validate_config(_config()) == (True, [], [])

    def test_not_a_dict(self):
        is_valid, errors, _ = validate_config(['DEFAULT'])
        assert not is_valid
        assert 'dictionary' in errors[0]

    def test_missing_default(self):
        config = _config()
        del config['DEFAULT']
        is_valid, errors, _ = validate_config(config)
        assert not is_valid
        assert "'DEFAULT'" in errors[0]

    def test_unknown_section_warns(self):
        is_valid, _, warnings = validate_config(_config(TRACKERS={}))
        assert is_valid
        assert 'Unknown config section' in _messages(warnings)


class TestDefault:
    def test_non_positive_timeout(self):
        is_valid, errors, _ = validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'timeout': 0}))
        assert not is_valid
        assert 'timeout' in errors[0]

    def test_bad_proxy(self):
        is_valid, errors, _ = validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'proxy': 'localhost:8080'}))
        assert not is_valid
        assert 'proxy' in errors[0]

    @pytest.mark.parametrize('proxy', ['http://127.0.0.1:7890', 'socks5://127.0.0.1:1080', '', None])
    def test_good_proxy(self, proxy):
        assert validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'proxy': proxy}))[0]

    def test_wrong_type_warns(self):
        is_valid, _, warnings = validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'debug': 'yes'}))
        assert is_valid
        assert '[DEFAULT][debug]' in _messages(warnings)

    def test_bool_timeout_warns(self):
        _, _, warnings = validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'timeout': True}))
        assert '[DEFAULT][timeout]' in _messages(warnings)

    def test_unparseable_task_limit(self):
        _, _, warnings = validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'task_limit': 'many'}))
        assert 'task_limit' in _messages(warnings)

    def test_empty_exts(self):
        _, _, warnings = validate_config(_config(DEFAULT={**BASE['DEFAULT'], 'exts': []}))
        assert '[DEFAULT][exts]' in _messages(warnings)


class TestSources:
    def test_unknown_source_warns(self):
        is_valid, _, warnings = validate_config(_config(SOURCES={'NOPE': {}}))
        assert is_valid
        assert '[SOURCES][NOPE]' in _messages(warnings)

    def test_bad_base_url(self):
        is_valid, errors, _ = validate_config(_config(SOURCES={'AVSOX': {'base_url': 'avsox'}}))
        assert not is_valid
        assert 'base_url' in errors[0]

    def test_bad_interval_and_capacity(self):
        is_valid, errors, _ = validate_config(_config(SOURCES={'JAVDB': {'interval': 0, 'capacity': 0}}))
        assert not is_valid
        assert len(errors) == 2

    def test_not_a_dict(self):
        is_valid, errors, _ = validate_config(_config(SOURCES=[]))
        assert not is_valid
        assert 'SOURCES' in errors[0]

    def test_all_disabled_warns(self):
        sources = {name: {'enabled': False} for name in ['AVSOX', 'JAVDB', 'FC2PPVDB', 'SUBTITLECAT']}
        _, _, warnings = validate_config(_config(SOURCES=sources))
        assert 'Every source is disabled' in _messages(warnings)


class TestTranslators:
    def test_not_a_list(self):
        is_valid, errors, _ = validate_config(_config(TRANSLATORS={'type': 'deepl'}))
        assert not is_valid
        assert 'list' in errors[0]

    def test_missing_key(self):
        is_valid, errors, _ = validate_config(_config(TRANSLATORS=[{'type': 'openai', 'key': ''}]))
        assert not is_valid
        assert "requires 'key'" in errors[0]

    def test_unknown_type_warns(self):
        is_valid, _, warnings = validate_config(_config(TRANSLATORS=[{'type': 'babelfish'}]))
        assert is_valid
        assert 'babelfish' in _messages(warnings)

    def test_empty_list(self):
        assert validate_config(_config(TRANSLATORS=[]))[0]


class TestFormatting:
    def test_group_warnings(self):
        warnings = [
            ConfigValidationWarning('same', key='AVSOX', section='SOURCES'),
            ConfigValidationWarning('same', key='JAVDB', section='SOURCES'),
            ConfigValidationWarning('other', section='DEFAULT'),
        ]
        assert group_warnings(warnings) == ['[SOURCES][AVSOX, JAVDB] same', '[DEFAULT] other']

    def test_format_passed(self):
        assert format_validation_results(True, [], []) == 'Config validation passed.'

    def test_format_errors(self):
        text = format_validation_results(False, ['broken'], [ConfigValidationWarning('careful', key='k')])
        assert 'Config Validation Errors:' in text
        assert '✗ broken' in text
        assert '⚠ [k] careful' in text
