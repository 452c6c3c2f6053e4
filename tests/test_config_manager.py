"""Tests for parameter persistence."""

from __future__ import annotations

import json
from dataclasses import replace

import pytest

from config_manager import ConfigManager
from models import SpiralParameters


def test_missing_file_gives_defaults(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    assert manager.load() == SpiralParameters()


def test_save_and_load_round_trip(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    params = replace(SpiralParameters(), turns=60, gamma=0.9, invert=True)

    assert manager.save(params) == (True, None)
    assert manager.load() == params


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"line_spacing": 5, "unknown": 1}))

    params = ConfigManager(path).load()

    assert params.line_spacing == 5.0
    assert isinstance(params.line_spacing, float)
    assert params.turns == SpiralParameters().turns


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert ConfigManager(path).load() == SpiralParameters()


def test_wrong_value_type_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"turns": "many"}))
    assert ConfigManager(path).load() == SpiralParameters()


def test_save_failure_is_reported(tmp_path):
    manager = ConfigManager(tmp_path)  # a directory cannot be opened for writing
    ok, error = manager.save(SpiralParameters())
    assert ok is False
    assert error


def test_reset_persists_defaults(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    manager.save(replace(SpiralParameters(), turns=3))

    assert manager.reset() == SpiralParameters()
    assert manager.load() == SpiralParameters()


@pytest.mark.parametrize("value", ["false", 0, None])
def test_flags_must_be_json_booleans(tmp_path, value):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"invert": value, "turns": 12}))
    assert ConfigManager(path).load() == SpiralParameters()


def test_boolean_flags_load(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"invert": True, "crop_to_circle": False}))

    params = ConfigManager(path).load()

    assert params.invert is True
    assert params.crop_to_circle is False
