"""Main application window for the spiral portrait generator."""

from pathlib import Path
from typing import Optional

from loguru import logger
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from config_manager import ConfigManager
from models import RenderResult, SourceImage, SpiralParameters
from spiral_processing import spiral_path_to_svg
from ui.components import SpiralControlsWidget
from ui.image_panel import ImagePanel
from ui.styles import SIZES

DEFAULT_EXPORT_NAME = "spiral-portrait"


class SpiralPortraitWindow(QMainWindow):
    """Main application window."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        super().__init__()
        self.setWindowTitle("Spiral Portrait Generator")
        self.setMinimumSize(*SIZES.WINDOW_MIN_SIZE)

        # Application state
        self.config_manager = config_manager or ConfigManager()
        self.params: SpiralParameters = self.config_manager.load()
        self.result: Optional[RenderResult] = None

        # UI component references (created in _setup_ui)
        self.controls: SpiralControlsWidget
        self.image_panel: ImagePanel

        self._setup_ui()
        self._connect_signals()
        self._update_export_actions()

    def _setup_ui(self):
        """Initialize the user interface."""
        self._create_toolbar()

        central = QWidget()
        layout = QHBoxLayout()

        controls_group = QGroupBox("Settings")
        controls_group.setMinimumWidth(SIZES.CONTROLS_MIN_WIDTH)
        controls_layout = QVBoxLayout()
        self.controls = SpiralControlsWidget(self.params)
        controls_layout.addWidget(self.controls)
        controls_layout.addStretch()
        controls_group.setLayout(controls_layout)
        layout.addWidget(controls_group)

        self.image_panel = ImagePanel(self.params)
        layout.addWidget(self.image_panel, stretch=1)

        central.setLayout(layout)
        self.setCentralWidget(central)
        self.statusBar().showMessage("Load an image to begin")

    def _create_toolbar(self):
        """Create the main toolbar."""
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.open_action = QAction("Open...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        toolbar.addAction(self.open_action)

        self.paste_action = QAction("Paste", self)
        self.paste_action.setShortcut(QKeySequence.StandardKey.Paste)
        toolbar.addAction(self.paste_action)

        toolbar.addSeparator()

        self.reset_action = QAction("Reset", self)
        self.reset_action.setToolTip("Restore default settings")
        toolbar.addAction(self.reset_action)

        toolbar.addSeparator()

        self.save_png_action = QAction("Save PNG...", self)
        self.save_png_action.setShortcut(QKeySequence.StandardKey.Save)
        toolbar.addAction(self.save_png_action)

        self.save_svg_action = QAction("Save SVG...", self)
        toolbar.addAction(self.save_svg_action)

    def _connect_signals(self):
        """Connect component signals."""
        self.open_action.triggered.connect(self.image_panel.browse)
        self.paste_action.triggered.connect(self.image_panel.paste_from_clipboard)
        self.reset_action.triggered.connect(self._on_reset)
        self.save_png_action.triggered.connect(self._on_save_png)
        self.save_svg_action.triggered.connect(self._on_save_svg)

        self.controls.parameters_changed.connect(self._on_parameters_changed)
        self.image_panel.image_loaded.connect(self._on_image_loaded)
        self.image_panel.render_complete.connect(self._on_render_complete)
        self.image_panel.render_cleared.connect(self._on_render_cleared)

    # === Event Handlers ===

    def _on_parameters_changed(self, params: SpiralParameters):
        """Persist new parameters and trigger a fresh render."""
        self.params = params
        self.config_manager.save(params)
        # Output of the old parameters must not be exported anymore
        self._on_render_cleared()
        self.image_panel.set_parameters(params)

    def _on_reset(self):
        """Restore default parameters."""
        params = self.config_manager.reset()
        self.controls.set_parameters(params)
        self._on_parameters_changed(params)
        self.statusBar().showMessage("Settings reset to defaults", 3000)

    def _on_image_loaded(self, source: SourceImage):
        self.statusBar().showMessage(
            f"Loaded {source.width}x{source.height} image, rendering..."
        )

    def _on_render_complete(self, result: RenderResult):
        self.result = result
        self._update_export_actions()
        self.statusBar().showMessage(
            f"Rendered {result.parameters.resolution}px spiral", 3000
        )

    def _on_render_cleared(self):
        self.result = None
        self._update_export_actions()

    def _update_export_actions(self):
        has_result = self.result is not None
        self.save_png_action.setEnabled(has_result)
        self.save_svg_action.setEnabled(has_result)

    def _ask_save_path(self, suffix: str, file_filter: str) -> Optional[Path]:
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Spiral", f"{DEFAULT_EXPORT_NAME}{suffix}", file_filter
        )
        return Path(file_path) if file_path else None

    def _write_export(self, path: Path, data: "bytes | str"):
        try:
            if isinstance(data, bytes):
                path.write_bytes(data)
            else:
                path.write_text(data, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not save {path}: {e}")
            QMessageBox.critical(self, "Save Failed", f"Could not save file:\n{e}")
            return
        logger.info(f"Saved {path}")
        self.statusBar().showMessage(f"Saved {path.name}", 3000)

    def _on_save_png(self):
        if self.result is None:
            return
        path = self._ask_save_path(".png", "PNG Image (*.png)")
        if path is not None:
            self._write_export(path, self.result.png_bytes)

    def _on_save_svg(self):
        if self.result is None:
            return
        path = self._ask_save_path(".svg", "SVG Image (*.svg)")
        if path is not None:
            svg_text = spiral_path_to_svg(self.result.path, self.result.parameters)
            self._write_export(path, svg_text)

    def closeEvent(self, event):
        """Handle window close event."""
        self.image_panel.shutdown()
        event.accept()
