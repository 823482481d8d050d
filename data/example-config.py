# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
config = {
    "DEFAULT": {

        # MAIN SETTINGS

        # Directory scanned for video files when no path is given on the command line
        "input_dir": ".",

        # Finished movies are written to <output_dir>/<studio>/<id>/
        "output_dir": "output",

        # File extensions (without the dot) that are treated as videos
        "exts": ["mp4", "mkv", "avi", "wmv", "mov"],

        # Directory or file names that are never scanned
        "excludes": ["output", "@eaDir", ".DS_Store"],

        # HTTP timeout in seconds, applies to every source and translator
        "timeout": 30,

        # Proxy for all requests, e.g. "http://127.0.0.1:7890" or "socks5://127.0.0.1:1080"
        # Leave empty to connect directly
        "proxy": "",

        # How many videos are processed at the same time
        "task_limit": 4,

        # Print more information
        "debug": False,
    },

    "SOURCES": {
        # Every source is enabled unless "enabled" is False.
        # "interval" is seconds between requests, "capacity" is the burst size.
        "AVSOX": {
            "enabled": True,
            "base_url": "https://avsox.click",
            "interval": 1,
        },
        "JAVDB": {
            "enabled": True,
            "base_url": "https://javdb.com",
            # javdb bans aggressive clients
            "interval": 2,
        },
        "FC2PPVDB": {
            "enabled": True,
            "base_url": "https://fc2ppvdb.com",
            "interval": 1,
        },
        "SUBTITLECAT": {
            "enabled": True,
            "base_url": "https://www.subtitlecat.com",
            "interval": 1,
            # subtitlecat language code of the subtitle to download
            "language": "zh-CN",
        },
    },

    # Translators are tried in order, the first one that answers wins.
    # Leave the list empty to keep titles and plots untranslated.
    # Available types: openai, deepseek, deepl
    "TRANSLATORS": [
        # {
        #     "type": "openai",
        #     "key": "",
        #     "base": "https://api.openai.com/v1",
        #     "model": "gpt-4o-mini",
        #     "language": "Simplified Chinese",
        # },
        # {
        #     "type": "deepseek",
        #     "key": "",
        # },
        # {
        #     "type": "deepl",
        #     # free api keys end with ":fx"
        #     "key": "",
        #     "target_lang": "ZH",
        # },
    ],
}
