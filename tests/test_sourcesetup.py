# Tests for building the source list from config
"""
Test suite for metacap.sourcesetup.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from metacap.sources.base import Source
from metacap.sourcesetup import SOURCE_SETUP, close_sources, source_class_map


def _config(sources=None):
    return {'DEFAULT': {'timeout': 5}, 'SOURCES': sources or {}}


class TestSourcesEnabled:
    def test_all_by_default(self):
        assert SOURCE_SETUP(_config()).sources_enabled() == list(source_class_map)

    def test_disabled_in_config(self):
        enabled = SOURCE_SETUP(_config({'JAVDB': {'enabled': False}})).sources_enabled()
        assert 'JAVDB' not in enabled
        assert 'AVSOX' in enabled

    def test_selected_string(self):
        assert SOURCE_SETUP(_config()).sources_enabled('javdb, avsox,javdb') == ['JAVDB', 'AVSOX']

    def test_selected_list(self):
        assert SOURCE_SETUP(_config()).sources_enabled(['FC2PPVDB']) == ['FC2PPVDB']

    def test_unknown_is_ignored(self, capsys):
        assert SOURCE_SETUP(_config()).sources_enabled('NOPE,AVSOX') == ['AVSOX']
        assert "'NOPE' is not recognized" in capsys.readouterr().out

    def test_selected_but_disabled(self):
        assert SOURCE_SETUP(_config({'AVSOX': {'enabled': False}})).sources_enabled('AVSOX') == []


class TestBuildSources:
    def test_instances_follow_the_protocol(self):
        sources = SOURCE_SETUP(_config()).build_sources()
        try:
            assert [type(s).__name__ for s in sources] == list(source_class_map)
            assert all(isinstance(s, Source) for s in sources)
        finally:
            asyncio.run(close_sources(sources))

    def test_close_sources(self):
        with_close = MagicMock(close=AsyncMock())
        without_close = object()
        asyncio.run(close_sources([with_close, without_close]))
        with_close.close.assert_awaited_once()
