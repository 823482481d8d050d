# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""
Config validation helper.
Validates the user's config.py against expected structure and types.
"""

from collections import defaultdict
from typing import Any, cast
from urllib.parse import urlparse

from metacap.sourcesetup import source_class_map

# Required top-level sections
REQUIRED_SECTIONS = ["DEFAULT"]

# Optional top-level sections
OPTIONAL_SECTIONS = ["SOURCES", "TRANSLATORS"]

# Expected types for DEFAULT keys (type mismatches are warnings)
DEFAULT_KEY_TYPES: dict[str, tuple[type, ...]] = {
    "input_dir": (str,),
    "output_dir": (str,),
    "exts": (list,),
    "excludes": (list,),
    "timeout": (int, float),
    "proxy": (str, type(None)),
    "task_limit": (int, str),
    "debug": (bool,),
}

SOURCE_KEY_TYPES: dict[str, tuple[type, ...]] = {
    "enabled": (bool,),
    "base_url": (str, type(None)),
    "interval": (int, float),
    "capacity": (int,),
    "language": (str,),
}

# Translator type -> keys it cannot work without
TRANSLATOR_REQUIRED_KEYS: dict[str, list[str]] = {
    "openai": ["key"],
    "deepseek": ["key"],
    "deepl": ["key"],
}


class ConfigValidationWarning:
    """Represents a non-critical config warning."""

    def __init__(self, message: str, key: str = "", section: str = ""):
        self.message = message
        self.key = key
        self.section = section

    def __str__(self) -> str:
        location = ""
        if self.section:
            location = f"[{self.section}]"
            if self.key:
                location += f"[{self.key}]"
        elif self.key:
            location = f"[{self.key}]"

        return f"{location} {self.message}" if location else self.message


def _as_dict(value: Any) -> dict[str, Any]:
    return cast(dict[str, Any], value) if isinstance(value, dict) else {}


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https", "socks5", "socks5h") and bool(parsed.netloc)


def validate_config(config: Any) -> tuple[bool, list[str], list[ConfigValidationWarning]]:
    """
    Validate the config dictionary structure and types.

    Returns:
        Tuple of (is_valid, errors, warnings)
        - is_valid: True if config passes critical validation
        - errors: List of critical error messages
        - warnings: List of non-critical warnings
    """
    errors: list[str] = []
    warnings: list[ConfigValidationWarning] = []

    if not isinstance(config, dict):
        errors.append(f"Config must be a dictionary, got {type(config).__name__}")
        return False, errors, warnings

    config_dict = cast(dict[str, Any], config)

    for section in REQUIRED_SECTIONS:
        if section not in config_dict:
            errors.append(f"Missing required config section: '{section}'")
        elif not isinstance(config_dict[section], dict):
            errors.append(f"Config section '{section}' must be a dictionary, got {type(config_dict[section]).__name__}")

    if errors:
        return False, errors, warnings

    default_errors, default_warnings = _validate_default_section(_as_dict(config_dict.get("DEFAULT")))
    errors.extend(default_errors)
    warnings.extend(default_warnings)

    if "SOURCES" in config_dict:
        if isinstance(config_dict["SOURCES"], dict):
            source_errors, source_warnings = _validate_sources_section(_as_dict(config_dict["SOURCES"]))
            errors.extend(source_errors)
            warnings.extend(source_warnings)
        else:
            errors.append(f"Config section 'SOURCES' must be a dictionary, got {type(config_dict['SOURCES']).__name__}")

    if "TRANSLATORS" in config_dict:
        translator_errors, translator_warnings = _validate_translators_section(config_dict["TRANSLATORS"])
        errors.extend(translator_errors)
        warnings.extend(translator_warnings)

    known_sections = set(REQUIRED_SECTIONS + OPTIONAL_SECTIONS)
    warnings.extend(
        [ConfigValidationWarning(f"Unknown config section '{section}' - this may be intentional", section=section) for section in config_dict if section not in known_sections]
    )

    is_valid = len(errors) == 0
    return is_valid, errors, warnings


def _validate_default_section(default: dict[str, Any]) -> tuple[list[str], list[ConfigValidationWarning]]:
    """Validate the DEFAULT config section."""
    errors: list[str] = []
    warnings: list[ConfigValidationWarning] = []

    for key, expected_types in DEFAULT_KEY_TYPES.items():
        if key in default and default[key] is not None:
            value = default[key]
            # bool is an int subclass, do not let True pass as a timeout
            if not isinstance(value, expected_types) or (isinstance(value, bool) and bool not in expected_types):
                warnings.append(
                    ConfigValidationWarning(f"Expected type {' or '.join(t.__name__ for t in expected_types)}, got {type(value).__name__}", key=key, section="DEFAULT")
                )

    timeout = default.get("timeout")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout <= 0:
        errors.append("DEFAULT['timeout'] must be larger than 0")

    task_limit = default.get("task_limit")
    if isinstance(task_limit, str):
        try:
            int(task_limit)
        except ValueError:
            warnings.append(ConfigValidationWarning(f"Cannot parse '{task_limit}' as integer", key="task_limit", section="DEFAULT"))

    proxy = default.get("proxy")
    if isinstance(proxy, str) and proxy.strip() and not _is_url(proxy.strip()):
        errors.append(f"DEFAULT['proxy'] should be a url, got '{proxy}'")

    exts = default.get("exts")
    if isinstance(exts, list) and not exts:
        warnings.append(ConfigValidationWarning("Empty - no video file will be picked up", key="exts", section="DEFAULT"))

    return errors, warnings


def _validate_sources_section(sources: dict[str, Any]) -> tuple[list[str], list[ConfigValidationWarning]]:
    """Validate the SOURCES config section."""
    errors: list[str] = []
    warnings: list[ConfigValidationWarning] = []

    for source_name, source_config in sources.items():
        if source_name.upper() not in source_class_map:
            warnings.append(ConfigValidationWarning("Unknown source - it will be ignored", key=source_name, section="SOURCES"))
            continue
        if not isinstance(source_config, dict):
            errors.append(f"SOURCES['{source_name}'] must be a dictionary, got {type(source_config).__name__}")
            continue

        settings = cast(dict[str, Any], source_config)
        for key, expected_types in SOURCE_KEY_TYPES.items():
            if key in settings and not isinstance(settings[key], expected_types):
                warnings.append(
                    ConfigValidationWarning(f"'{key}' expected {' or '.join(t.__name__ for t in expected_types)}, got {type(settings[key]).__name__}", key=source_name, section="SOURCES")
                )

        base_url = settings.get("base_url")
        if isinstance(base_url, str) and base_url.strip() and not _is_url(base_url.strip()):
            errors.append(f"SOURCES['{source_name}']['base_url'] should be a url, got '{base_url}'")

        interval = settings.get("interval")
        if isinstance(interval, (int, float)) and interval <= 0:
            errors.append(f"SOURCES['{source_name}']['interval'] must be larger than 0")
        capacity = settings.get("capacity")
        if isinstance(capacity, int) and capacity < 1:
            errors.append(f"SOURCES['{source_name}']['capacity'] must be at least 1")

    by_name = {name.upper(): _as_dict(cfg) for name, cfg in sources.items()}
    if all(name in by_name and by_name[name].get("enabled", True) is False for name in source_class_map):
        warnings.append(ConfigValidationWarning("Every source is disabled - nothing will be found", section="SOURCES"))

    return errors, warnings


def _validate_translators_section(translators: Any) -> tuple[list[str], list[ConfigValidationWarning]]:
    """Validate the TRANSLATORS config section (an ordered list)."""
    errors: list[str] = []
    warnings: list[ConfigValidationWarning] = []

    if not isinstance(translators, list):
        errors.append(f"Config section 'TRANSLATORS' must be a list, got {type(translators).__name__}")
        return errors, warnings

    for i, entry in enumerate(cast(list[Any], translators)):
        if not isinstance(entry, dict):
            errors.append(f"TRANSLATORS[{i}] must be a dictionary, got {type(entry).__name__}")
            continue
        settings = cast(dict[str, Any], entry)
        kind = str(settings.get("type", "")).lower()
        if kind not in TRANSLATOR_REQUIRED_KEYS:
            warnings.append(
                ConfigValidationWarning(f"Unknown translator type '{kind}'. Valid types: {', '.join(TRANSLATOR_REQUIRED_KEYS)}", key=str(i), section="TRANSLATORS")
            )
            continue
        for key in TRANSLATOR_REQUIRED_KEYS[kind]:
            value = settings.get(key, "")
            if not isinstance(value, str) or not value.strip():
                errors.append(f"Translator '{kind}' (TRANSLATORS[{i}]) requires '{key}' but it is not set")

    return errors, warnings


def group_warnings(warnings: list[ConfigValidationWarning]) -> list[str]:
    """
    Group warnings with the same section and message, combining keys.

    For example, two sources with the same warning become:
    [SOURCES][AVSOX, JAVDB] 'interval' expected int or float, got str
    """
    grouped: dict[tuple[str, str], list[str]] = defaultdict(list)

    for warning in warnings:
        grouped[(warning.section, warning.message)].append(warning.key)

    result: list[str] = []
    for (section, message), keys in grouped.items():
        non_empty_keys = [k for k in keys if k]
        location = f"[{section}]" if section else ""
        if non_empty_keys:
            location += f"[{', '.join(non_empty_keys)}]"
        result.append(f"{location} {message}" if location else message)

    return result


def format_validation_results(is_valid: bool, errors: list[str], warnings: list[ConfigValidationWarning], show_warnings: bool = True) -> str:
    """Format validation results for display."""
    lines: list[str] = []

    if errors:
        lines.append("Config Validation Errors:")
        lines.extend([f"  ✗ {error}" for error in errors])

    if show_warnings and warnings:
        if lines:
            lines.append("")
        lines.append("Config Validation Warnings:")
        lines.extend([f"  ⚠ {warning_str}" for warning_str in group_warnings(warnings)])

    if is_valid and not warnings:
        lines.append("Config validation passed.")
    elif is_valid:
        lines.append(f"\nConfig validation passed with {len(warnings)} warning(s).")

    return "\n".join(lines)
