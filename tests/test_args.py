# Tests for command line parsing
"""
Test suite for metacap.args.
"""

import pytest

from metacap.args import Args

CONFIG = {'DEFAULT': {'input_dir': '/videos', 'output_dir': '/library', 'debug': False}}


class TestArgs:
    def test_defaults_from_config(self):
        settings = Args(CONFIG).parse([])
        assert settings == {
            'path': '/videos',
            'output_dir': '/library',
            'sources': None,
            'dry_run': False,
            'translate': True,
            'debug': False,
        }

    def test_overrides(self):
        settings = Args(CONFIG).parse(['/incoming', '-o', '/elsewhere', '--sources', 'AVSOX,JAVDB', '--dry-run', '--no-translate', '--debug'])
        assert settings['path'] == '/incoming'
        assert settings['output_dir'] == '/elsewhere'
        assert settings['sources'] == 'AVSOX,JAVDB'
        assert settings['dry_run']
        assert not settings['translate']
        assert settings['debug']

    def test_debug_from_config(self):
        assert Args({'DEFAULT': {'debug': True}}).parse([])['debug']

    def test_empty_config(self):
        settings = Args({}).parse([])
        assert settings['path'] == '.'
        assert settings['output_dir'] == 'output'

    def test_unknown_flag_exits(self):
        with pytest.raises(SystemExit):
            Args(CONFIG).parse(['--bogus'])
