"""Localized strings for the user interface."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable

DEFAULT_LANGUAGE = "en"

_CATALOGS: dict[str, dict[str, str]] = {
    DEFAULT_LANGUAGE: {
        "app-title": "Cosmonaute",
        "about": "About",
        "git-description": "Git commit { $hash } on { $date }",
    },
}

_PLACEABLE = re.compile(r"\{\s*\$([A-Za-z][\w-]*)\s*\}")

_selected = DEFAULT_LANGUAGE


def _primary_subtag(tag: str) -> str:
    return str(tag).replace("_", "-").split("-", 1)[0].lower()


def init(requested_languages: Iterable[str]) -> None:
    """Select the first requested language that has translations."""
    global _selected
    try:
        for tag in requested_languages:
            language = _primary_subtag(tag)
            if language in _CATALOGS:
                _selected = language
                return
    except TypeError as why:
        print(f"error while loading fluent localizations: {why}", file=sys.stderr)
    _selected = DEFAULT_LANGUAGE


def current_language() -> str:
    """The language currently used by fl()."""
    return _selected


def fl(message_id: str, **kwargs: object) -> str:
    """Look up a localized message and fill in its arguments."""
    message = _CATALOGS.get(_selected, {}).get(message_id)
    if message is None:
        message = _CATALOGS[DEFAULT_LANGUAGE].get(message_id)
    if message is None:
        raise KeyError(message_id)

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in kwargs:
            return str(kwargs[name])
        return "{$" + name + "}"

    return _PLACEABLE.sub(substitute, message)