"""Tests for wiring between the main window and its panels."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from conftest import make_source  # noqa: E402
from config_manager import ConfigManager  # noqa: E402
from ui.main_window import SpiralPortraitWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp, tmp_path):
    window = SpiralPortraitWindow(ConfigManager(tmp_path / "config.json"))
    yield window
    window.image_panel.shutdown()
    window.deleteLater()


def test_loaded_image_size_is_shown(window):
    window.image_panel.image_loaded.emit(make_source((0, 0, 0), size=(30, 20)))
    assert "30x20" in window.statusBar().currentMessage()


def test_export_actions_start_disabled(window):
    assert not window.save_png_action.isEnabled()
    assert not window.save_svg_action.isEnabled()
