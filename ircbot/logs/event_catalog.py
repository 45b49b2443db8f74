"""Catalog of human readable log templates keyed by (domain, action).

Templates live in ``event_templates.json`` next to this module as a two level
object: ``{"domain": {"action": "template with {placeholders}"}}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")
LOAD_ERROR_KEY = ("app", "load_error")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def load_event_templates(path: Path = TEMPLATES_PATH) -> dict[tuple[str, str], str]:
    """Read and flatten the template file.

    A missing or unreadable file yields a catalog holding only a
    ``LOAD_ERROR_KEY`` entry, so logging keeps working with derived messages.
    Non-string entries are skipped.
    """
    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {LOAD_ERROR_KEY: f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {LOAD_ERROR_KEY: f"Failed to load event templates: {e}"[:200]}
    if not isinstance(raw, dict):
        return {LOAD_ERROR_KEY: "Event templates file must hold a JSON object"}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(template, str)
    }


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = load_event_templates(path or TEMPLATES_PATH)


def template_for(domain: str, action: str) -> str | None:
    return EVENT_TEMPLATES.get((domain, action))


reload_event_templates()

__all__ = [
    "EVENT_TEMPLATES",
    "LOAD_ERROR_KEY",
    "load_event_templates",
    "reload_event_templates",
    "template_for",
]
