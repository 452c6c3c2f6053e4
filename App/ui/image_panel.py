"""Image input and spiral preview panel."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PyQt6.QtCore import (
    QBuffer,
    QIODevice,
    QMimeData,
    QMimeDatabase,
    Qt,
    QThread,
    pyqtSignal,
)
from PyQt6.QtGui import QGuiApplication, QImage, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from models import RenderResult, SourceImage, SpiralParameters
from spiral_processing import (
    DecodeError,
    RenderQueue,
    RenderTicket,
    SpiralError,
    load_image,
    render_spiral,
)
from ui.styles import SIZES, drop_zone_stylesheet, status_stylesheet

NOT_AN_IMAGE_MESSAGE = "Please choose an image file."
DECODE_FAILED_MESSAGE = "Couldn't load that image. Try another file."
DROP_HINT = (
    "Drop an image here, click Browse, or paste from clipboard\n"
    "JPG/PNG/WebP - high-contrast faces work best"
)


class RenderThread(QThread):
    """Background thread for rendering to avoid blocking UI."""

    render_finished = pyqtSignal(int, object)  # generation, RenderResult
    render_failed = pyqtSignal(int, str)  # generation, error message

    def __init__(self, ticket: RenderTicket):
        super().__init__()
        self.ticket = ticket

    def run(self):
        """Execute the render in background."""
        source, params = self.ticket.job
        try:
            result = render_spiral(source, params)
        except SpiralError as e:
            self.render_failed.emit(self.ticket.generation, str(e))
            return
        self.render_finished.emit(self.ticket.generation, result)


class ImagePanel(QGroupBox):
    """Panel for image input, rendering and preview."""

    # Signals for communication with main window
    image_loaded = pyqtSignal(object)  # SourceImage
    render_complete = pyqtSignal(object)  # RenderResult
    render_cleared = pyqtSignal()

    def __init__(self, params: SpiralParameters, parent: QWidget | None = None):
        super().__init__("Spiral", parent)
        self.params = params
        self.source: SourceImage | None = None
        self.result: RenderResult | None = None
        self.render_queue: RenderQueue = RenderQueue()
        self.render_thread: RenderThread | None = None

        self.setAcceptDrops(True)
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Initialize the UI components."""
        layout = QVBoxLayout()

        # --- Preview / drop zone ---
        self.preview_label = QLabel(DROP_HINT)
        self.preview_label.setMinimumSize(*SIZES.PREVIEW_MIN_SIZE)
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_label.setStyleSheet(drop_zone_stylesheet())
        layout.addWidget(self.preview_label, stretch=1)

        # --- File selection ---
        file_layout = QHBoxLayout()
        self.file_path_label = QLabel("No image selected")
        self.file_path_label.setWordWrap(True)
        file_layout.addWidget(self.file_path_label, stretch=1)

        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.setToolTip("Select an image file (PNG, JPG, WebP, ...)")
        file_layout.addWidget(self.browse_btn)

        self.rerender_btn = QPushButton("Re-render")
        self.rerender_btn.setEnabled(False)
        file_layout.addWidget(self.rerender_btn)
        layout.addLayout(file_layout)

        # --- Progress and status ---
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 0)  # busy indicator
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        self.setLayout(layout)

    def _connect_signals(self):
        """Connect internal signals to handlers."""
        self.browse_btn.clicked.connect(self.browse)
        self.rerender_btn.clicked.connect(self.request_render)

    # === Drag and drop ===

    def dragEnterEvent(self, event):
        mime = event.mimeData()
        if mime is not None and (mime.hasUrls() or mime.hasImage()):
            self.preview_label.setStyleSheet(drop_zone_stylesheet(active=True))
            event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        self.preview_label.setStyleSheet(drop_zone_stylesheet())

    def dropEvent(self, event):
        self.preview_label.setStyleSheet(drop_zone_stylesheet())
        mime = event.mimeData()
        if mime is not None and self._load_mime(mime):
            event.acceptProposedAction()

    # === Event Handlers ===

    def browse(self):
        """Let the user pick an image file."""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            "",
            "Images (*.png *.jpg *.jpeg *.webp *.bmp *.gif *.tiff);;All Files (*)",
        )
        if file_path:
            self.load_file(file_path)

    def _load_mime(self, mime: QMimeData) -> bool:
        """Load the first image found in dropped or pasted data."""
        if mime.hasUrls():
            for url in mime.urls():
                if url.isLocalFile():
                    self.load_file(url.toLocalFile())
                    return True
        if mime.hasImage():
            image = QImage(mime.imageData())
            if not image.isNull():
                self.load_bytes(_qimage_to_png(image), "clipboard image")
                return True
        self._show_status(NOT_AN_IMAGE_MESSAGE, is_error=True)
        return False

    def _on_render_finished(self, generation: int, result: RenderResult):
        """Handle a completed render."""
        publish, next_ticket = self.render_queue.complete(generation)
        self._retire_thread()

        if publish:
            self.result = result
            self._show_preview(result)
            self.progress_bar.setVisible(False)
            self._show_status(
                f"Done! {result.sample_count} samples, "
                f"{result.total_path_length:.0f}px of stroke"
            )
            self.render_complete.emit(result)
        else:
            logger.debug(f"Dropped superseded render {generation}")

        if next_ticket is not None:
            self._start_render(next_ticket)

    def _on_render_failed(self, generation: int, error_msg: str):
        """Handle render error."""
        publish, next_ticket = self.render_queue.complete(generation)
        self._retire_thread()

        if publish:
            logger.error(f"Render {generation} failed: {error_msg}")
            self.progress_bar.setVisible(False)
            self._clear_result()
            pretty_msg = error_msg.replace("\n", " ").strip()
            self._show_status(f"Error: {pretty_msg}", is_error=True)

        if next_ticket is not None:
            self._start_render(next_ticket)

    # === Rendering ===

    def _start_render(self, ticket: RenderTicket):
        self.progress_bar.setVisible(True)
        self._show_status("Rendering spiral...")

        self.render_thread = RenderThread(ticket)
        self.render_thread.render_finished.connect(self._on_render_finished)
        self.render_thread.render_failed.connect(self._on_render_failed)
        self.render_thread.start()

    def _retire_thread(self):
        # The slot runs right after run() returns; let the thread exit fully
        # before dropping the last reference to it
        if self.render_thread is not None:
            self.render_thread.wait()
            self.render_thread = None

    def _clear_result(self):
        """Drop the published output so no stale image stays visible."""
        self.result = None
        self.preview_label.setPixmap(QPixmap())
        self.preview_label.setText(DROP_HINT if self.source is None else "")
        self.render_cleared.emit()

    def _show_preview(self, result: RenderResult):
        pixmap = QPixmap()
        if not pixmap.loadFromData(result.png_bytes, "PNG"):
            self._show_status("Failed to display rendered image.", is_error=True)
            return
        scaled = pixmap.scaled(
            self.preview_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.preview_label.setPixmap(scaled)

    def _show_status(self, message: str, is_error: bool = False):
        self.status_label.setStyleSheet(status_stylesheet(is_error))
        self.status_label.setText(message)

    # === Public Methods ===

    def load_file(self, file_path: str):
        """Load an image file chosen, dropped or pasted by the user."""
        mime_type = QMimeDatabase().mimeTypeForFile(file_path)
        if not mime_type.name().startswith("image/"):
            self._show_status(NOT_AN_IMAGE_MESSAGE, is_error=True)
            return

        try:
            data = Path(file_path).read_bytes()
        except OSError as e:
            logger.warning(f"Could not read {file_path}: {e}")
            self._show_status(DECODE_FAILED_MESSAGE, is_error=True)
            return
        self.load_bytes(data, Path(file_path).name)

    def load_bytes(self, data: bytes, label: str):
        """Decode image bytes and render them with the current parameters."""
        try:
            source = load_image(data)
        except DecodeError as e:
            logger.warning(f"Could not decode {label}: {e}")
            self._show_status(DECODE_FAILED_MESSAGE, is_error=True)
            return

        self.source = source
        self.file_path_label.setText(
            f"Selected: {label} ({source.width}x{source.height})"
        )
        self.rerender_btn.setEnabled(True)
        self.image_loaded.emit(source)
        self.request_render()

    def paste_from_clipboard(self):
        """Load an image (or image file) from the clipboard."""
        clipboard = QGuiApplication.clipboard()
        mime = clipboard.mimeData() if clipboard is not None else None
        if mime is None:
            self._show_status("Clipboard is empty.", is_error=True)
            return
        self._load_mime(mime)

    def set_parameters(self, params: SpiralParameters):
        """Update parameters and re-render if an image is loaded."""
        self.params = params
        self.request_render()

    def request_render(self):
        """Queue a full render of the current image and parameters."""
        if self.source is None:
            return
        ticket = self.render_queue.submit((self.source, self.params))
        if ticket is not None:
            self._start_render(ticket)
        else:
            self._show_status("Rendering spiral (update queued)...")

    def shutdown(self):
        """Stop publishing and wait for a running render to finish."""
        self.render_queue.clear()
        if self.render_thread is not None:
            self.render_thread.wait()


def _qimage_to_png(image: QImage) -> bytes:
    """Encode a QImage (e.g. from the clipboard) as PNG bytes."""
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    image.save(buffer, "PNG")
    return bytes(buffer.data())
