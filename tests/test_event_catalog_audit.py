"""Every logged event has a template and every template renders."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

from ircbot.logs import event_catalog

_SCRIPT = Path(__file__).parents[1] / "scripts" / "event_template_audit.py"
_spec = importlib.util.spec_from_file_location("event_template_audit", _SCRIPT)
if not (_spec and _spec.loader):
    raise AssertionError("Could not load scripts/event_template_audit.py")
audit = importlib.util.module_from_spec(_spec)
# dataclass resolution looks the module up by name while it executes
sys.modules[_spec.name] = audit
_spec.loader.exec_module(audit)


class _Zero(dict):
    def __missing__(self, key: str) -> int:
        return 0


def test_no_missing_or_unused_templates():
    result = audit.diff()
    assert result.missing == set(), f"Missing templates: {sorted(result.missing)}"
    assert result.unused == set(), f"Unused templates: {sorted(result.unused)}"


def test_templates_render():
    for key, template in event_catalog.EVENT_TEMPLATES.items():
        assert template.format_map(_Zero()), key


def test_audit_main_exit_code(capsys):
    assert audit.main([]) == 0
    assert "Event Template Audit Report" in capsys.readouterr().out


def test_missing_catalog_file_is_reported(tmp_path):
    try:
        event_catalog.reload_event_templates(tmp_path / "missing.json")
        assert ("app", "load_error") in event_catalog.EVENT_TEMPLATES
    finally:
        event_catalog.reload_event_templates()
    assert ("bot", "greet") in event_catalog.EVENT_TEMPLATES


def test_diff_result_reports_pairs(tmp_path):
    templates = tmp_path / "templates.json"
    templates.write_text('{"bot": {"greet": "hi", "spare": "unused"}}', encoding="utf-8")
    source = tmp_path / "pkg"
    source.mkdir()
    (source / "mod.py").write_text(
        'logger.log_event("bot", "greet")\nlogger.log_event("bot", "wave" if x else "nod")\n',
        encoding="utf-8",
    )
    result = audit.diff(source, templates)
    assert isinstance(result, audit.DiffResult)
    assert result.missing == {("bot", "wave"), ("bot", "nod")}
    assert result.unused == {("bot", "spare")}


def test_load_skips_malformed_entries(tmp_path):
    path = tmp_path / "templates.json"
    path.write_text(
        '{"bot": {"greet": "hi {handle}", "bad": 3}, "odd": ["x"]}', encoding="utf-8"
    )
    assert event_catalog.load_event_templates(path) == {("bot", "greet"): "hi {handle}"}


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "templates.json"
    path.write_text("[]", encoding="utf-8")
    assert set(event_catalog.load_event_templates(path)) == {event_catalog.LOAD_ERROR_KEY}


def test_template_lookup():
    assert event_catalog.template_for("keepalive", "sent") == "💓 PING :{host}"
    assert event_catalog.template_for("keepalive", "nope") is None
