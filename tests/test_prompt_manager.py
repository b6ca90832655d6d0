"""Tests for prompt loading and formatting helpers."""

import json
import string

import pytest

from tmsai.llm.prompt_manager import (
    NONE_SPECIFIED,
    bullet_lines,
    count_where,
    field,
    format_prompt,
    get_prompts_dir,
    json_or_none,
    load_prompt,
    to_json,
    truncate,
)
from tmsai.models.base import TimeRange
from tmsai.service.context import FleetSummary


def test_get_prompts_dir():
    """Prompts dir path exists."""
    path = get_prompts_dir()
    assert path.exists()
    assert "prompts" in str(path)


def test_load_prompt():
    prompt = load_prompt("system")
    assert "{context}" in prompt
    assert "Transport Management System" in prompt


def test_load_missing_prompt_raises():
    with pytest.raises(FileNotFoundError):
        load_prompt("does_not_exist")


def test_format_prompt_fills_context():
    result = format_prompt("system", context='{"fleet": 1}')
    assert '{"fleet": 1}' in result
    assert "{context}" not in result


@pytest.mark.parametrize("path", sorted(get_prompts_dir().glob("*.txt")), ids=lambda p: p.stem)
def test_every_template_formats_with_its_own_fields(path):
    """Escaped JSON examples survive formatting and every placeholder is named."""
    template = path.read_text(encoding="utf-8")
    names = {name for _, name, _, _ in string.Formatter().parse(template) if name}
    result = format_prompt(path.stem, **{name: f"<{name}>" for name in names})
    assert "{{" not in result
    if path.stem != "system":
        assert "role" in names


def test_to_json_handles_models_and_dataclasses():
    data = {"range": TimeRange(start="a", end="b"), "fleet": FleetSummary(total_vehicles=2)}
    parsed = json.loads(to_json(data))
    assert parsed["range"] == {"start": "a", "end": "b"}
    assert parsed["fleet"]["total_vehicles"] == 2


def test_json_or_none():
    assert json_or_none(None) == NONE_SPECIFIED
    assert json_or_none({}) == NONE_SPECIFIED
    assert json.loads(json_or_none({"max_hours": 9})) == {"max_hours": 9}
    assert json_or_none([], "Standard policies") == "Standard policies"


def test_truncate():
    assert truncate("abcdef", 3) == "abc"
    assert truncate(None, 3) == ""


def test_field_first_truthy_or_default():
    record = {"job_name": "", "id": "j1"}
    assert field(record, "job_name", "id") == "j1"
    assert field(record, "deadline") == "N/A"
    assert field(record, "priority", default="medium") == "medium"


def test_bullet_lines_and_count_where():
    rows = [{"id": "a", "status": "active"}, {"id": "b", "status": "idle"}]
    assert bullet_lines(rows, lambda r: r["id"]) == "- a\n- b"
    assert count_where(rows, "status", "active") == 1


def test_format_prompt_accepts_a_name_placeholder(tmp_path, monkeypatch):
    (tmp_path / "greeting.txt").write_text("Hello {name}, you are a {role}.", encoding="utf-8")
    monkeypatch.setattr("tmsai.llm.prompt_manager.get_prompts_dir", lambda: tmp_path)
    assert format_prompt("greeting", name="Sam", role="dispatcher") == "Hello Sam, you are a dispatcher."
