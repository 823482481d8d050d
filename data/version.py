__version__ = "v0.3.0"

"""
Release Notes for version v0.3.0 (2026-10-12):

# ## What's Changed
#
# * feat(translate): deepl and deepseek translators, ordered fallback
# * feat(sources): SUBTITLECAT subtitle lookup
# * fix(aggregator): recover from unexpected source exceptions
# * fix(record): merge ties no longer depend on source order
# * fix(nfo): refuse to overwrite an existing output directory
#
"""
