from __future__ import annotations

import json
from pathlib import Path

import pytest

from baumeister.config import CONFIG_FILENAME, load_config, load_stored_answers, save_config
from baumeister.context import build_context
from baumeister.errors import ConfigurationError


def test_save_config_writes_sorted_json_without_year(tmp_path: Path, make_context):
    path = save_config(make_context(), tmp_path / CONFIG_FILENAME)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert "year" not in data
    assert list(data) == sorted(data)
    assert data["name"] == "my-cool-site"


def test_saved_config_replays_to_the_same_context(tmp_path: Path, make_context):
    context = make_context()
    path = save_config(context, tmp_path / "nested" / CONFIG_FILENAME)

    assert build_context(load_config(path), clock=lambda: context.year) == context


def test_load_config_rejects_malformed_json(tmp_path: Path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_config(path)


def test_load_config_requires_an_object(tmp_path: Path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="JSON object"):
        load_config(path)


def test_load_stored_answers_without_previous_run(tmp_path: Path):
    assert load_stored_answers(tmp_path / CONFIG_FILENAME) == {}


def test_load_stored_answers_reads_previous_run(tmp_path: Path, make_context):
    path = save_config(make_context(), tmp_path / CONFIG_FILENAME)
    assert load_stored_answers(path)["license"] == "MIT"
