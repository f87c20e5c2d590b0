from __future__ import annotations
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QLineEdit, QFileDialog,
    QHBoxLayout, QTextEdit, QComboBox, QMessageBox, QScrollArea, QFrame,
    QToolButton, QGroupBox, QCheckBox, QSizePolicy, QInputDialog
)
from PySide6.QtCore import Qt, QThread, Signal, QObject
from pathlib import Path
from typing import Dict, List

from leafwalk.config import WalkConfig, default_config
from leafwalk.extract.extract_service import ExtractService, ExtractionSummary
from leafwalk.schema.field_catalog import FieldCatalog, list_catalogs
from leafwalk.utils.json_utils import RecordLoadError


# ---------------- Extract Worker ----------------
class ExtractWorker(QObject):
    finished = Signal(object)
    error = Signal(str)

    def __init__(self, service: ExtractService, folder: str, fields: List[str], out_path: str, as_json: bool):
        super().__init__()
        self.svc = service
        self.folder = folder
        self.fields = fields
        self.out_path = out_path
        self.as_json = as_json

    def run(self):
        try:
            if self.as_json:
                summary = self.svc.extract_to_json(self.folder, self.fields, self.out_path)
            else:
                summary = self.svc.extract_to_txt(self.folder, self.fields, self.out_path)
            self.finished.emit(summary)
        except Exception as e:
            self.error.emit(str(e))


# ---------------- Collapsible Group ----------------
class CollapsibleGroup(QGroupBox):
    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setTitle("")
        self._main = QVBoxLayout(self)
        self._main.setContentsMargins(0, 0, 0, 0)

        self._header = QToolButton()
        self._header.setStyleSheet("QToolButton { border: none; font-weight: 600; }")
        self._header.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self._header.setArrowType(Qt.RightArrow)
        self._header.setText(title)
        self._header.setCheckable(True)
        self._header.setChecked(False)
        self._header.toggled.connect(self._on_toggled)

        self._content = QWidget()
        self._content.setVisible(False)
        self._content.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.content_layout = QVBoxLayout(self._content)
        self.content_layout.setContentsMargins(12, 4, 4, 8)
        self.content_layout.setSpacing(4)

        self._main.addWidget(self._header)
        self._main.addWidget(self._content)

    def _on_toggled(self, checked: bool):
        self._header.setArrowType(Qt.DownArrow if checked else Qt.RightArrow)
        self._content.setVisible(checked)


# ---------------- Extract Panel (Main UI) ----------------
class ExtractPanel(QWidget):
    def __init__(self, project_root: Path | None = None):
        super().__init__()

        self.project_root = project_root or Path.cwd()
        self.thread = None
        self.worker = None
        self.checkbox_map: Dict[str, QCheckBox] = {}
        self.current_catalog: FieldCatalog | None = None

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Extract Panel"))

        # Folder picker
        self.folder_input = QLineEdit()
        self.folder_input.setPlaceholderText("Select folder for extraction...")
        browse_btn = QPushButton("Browse")
        browse_btn.clicked.connect(self.browse_folder)
        fl = QHBoxLayout()
        fl.addWidget(self.folder_input)
        fl.addWidget(browse_btn)
        layout.addLayout(fl)

        # Catalog selector
        self.catalog_selector = QComboBox()
        self.catalog_selector.addItem("Select catalog...")
        refresh_btn = QPushButton("Refresh Catalogs")
        refresh_btn.clicked.connect(self.refresh_catalogs)
        build_btn = QPushButton("+ Catalog from Samples")
        build_btn.clicked.connect(self.build_catalog)
        load_fields_btn = QPushButton("Load Fields")
        load_fields_btn.clicked.connect(self.load_fields_from_catalog)
        sl = QHBoxLayout()
        sl.addWidget(QLabel("Catalog:"))
        sl.addWidget(self.catalog_selector)
        sl.addWidget(refresh_btn)
        sl.addWidget(build_btn)
        sl.addWidget(load_fields_btn)
        layout.addLayout(sl)

        # Field selection scroll
        self.fields_scroll = QScrollArea()
        self.fields_scroll.setWidgetResizable(True)
        self.fields_container = QWidget()
        self.fields_layout = QVBoxLayout(self.fields_container)
        self.fields_scroll.setWidget(self.fields_container)
        layout.addWidget(QLabel("Leaf Fields"))
        layout.addWidget(self.fields_scroll)

        # Format selector
        self.format_selector = QComboBox()
        self.format_selector.addItems(["TXT", "JSON"])
        fmtrow = QHBoxLayout()
        fmtrow.addWidget(QLabel("Output Format:"))
        fmtrow.addWidget(self.format_selector)
        fmtrow.addStretch()
        layout.addLayout(fmtrow)

        # Buttons row
        btn_row = QHBoxLayout()
        self.extract_btn = QPushButton("Extract")
        self.extract_btn.clicked.connect(self.extract_data)
        btn_row.addWidget(self.extract_btn)
        btn_row.addStretch()
        layout.addLayout(btn_row)

        # Extraction output
        self.result_area = QTextEdit()
        self.result_area.setReadOnly(True)
        self.result_area.setPlaceholderText("Extraction summary will be shown here...")
        layout.addWidget(self.result_area)

        self.refresh_catalogs()

    # ---------------- Catalogs ----------------
    def browse_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select Folder")
        if folder:
            self.folder_input.setText(folder)

    def refresh_catalogs(self):
        self.catalog_selector.clear()
        found = False
        for f in list_catalogs(self.project_root):
            self.catalog_selector.addItem(f.stem, userData=str(f))
            found = True
        if not found:
            self.catalog_selector.addItem("No catalogs found")

    def build_catalog(self):
        files, _ = QFileDialog.getOpenFileNames(
            self, "Select Sample Documents", "", "JSON / Logs (*.json *.jsonl *.log *.txt);;All Files (*.*)"
        )
        if not files:
            return
        name, accepted = QInputDialog.getText(self, "Catalog Name", "Name (e.g., ChatPipelineLog_V1):")
        if not accepted or not name.strip():
            return

        try:
            catalog = FieldCatalog.from_files(name.strip(), [Path(f) for f in files])
            out_path = catalog.save(self.project_root)
        except RecordLoadError as e:
            QMessageBox.critical(self, "Sample Error", f"{e.source}\n{e}")
            return
        except Exception as e:
            QMessageBox.critical(self, "Catalog Error", str(e))
            return

        self.refresh_catalogs()
        idx = self.catalog_selector.findText(out_path.stem)
        if idx >= 0:
            self.catalog_selector.setCurrentIndex(idx)
        self._show_catalog(catalog)

    def load_fields_from_catalog(self):
        data_path = self.catalog_selector.currentData()
        if not data_path or not isinstance(data_path, str):
            QMessageBox.warning(self, "Catalog", "Please select a valid catalog first.")
            return
        try:
            catalog = FieldCatalog.load(Path(data_path))
        except Exception as e:
            QMessageBox.critical(self, "Catalog Load Error", str(e))
            return
        self._show_catalog(catalog)

    def _show_catalog(self, catalog: FieldCatalog):
        self._clear_fields_ui()
        self.checkbox_map.clear()

        for group_name, fields in catalog.groups().items():
            grp = CollapsibleGroup(group_name, self)
            for path in fields:
                cb = QCheckBox(path)
                grp.content_layout.addWidget(cb)
                self.checkbox_map[path] = cb
            spacer = QFrame()
            grp.content_layout.addWidget(spacer)
            self.fields_layout.addWidget(grp)
        self.fields_layout.addStretch(1)
        self.current_catalog = catalog

    # ---------------- Extraction ----------------
    def extract_data(self):
        folder = self.folder_input.text().strip()
        if not folder:
            QMessageBox.warning(self, "Folder", "Please select a folder.")
            return

        selected = self._selected_fields()
        if not selected:
            QMessageBox.warning(self, "Fields", "Please select at least one field.")
            return

        fmt = self.format_selector.currentText().upper()
        default_name = "extracted.json" if fmt == "JSON" else "extracted.txt"
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Extraction Output", default_name,
            "JSON (*.json);;Text (*.txt);;All Files (*.*)"
        )
        if not path:
            return

        service = ExtractService(config=self._catalog_config())
        as_json = fmt == "JSON" or path.lower().endswith(".json")

        self.extract_btn.setEnabled(False)
        self.result_area.setPlainText("Extracting...")

        self.thread = QThread()
        self.worker = ExtractWorker(service, folder, selected, path, as_json)
        self.worker.moveToThread(self.thread)

        self.thread.started.connect(self.worker.run)
        self.worker.finished.connect(self._extract_done)
        self.worker.error.connect(self._extract_error)

        self.worker.finished.connect(self.thread.quit)
        self.worker.error.connect(self.thread.quit)
        self.worker.finished.connect(self.worker.deleteLater)
        self.worker.error.connect(self.worker.deleteLater)
        self.thread.finished.connect(self.thread.deleteLater)

        self.thread.start()

    def _extract_done(self, summary: ExtractionSummary):
        self.result_area.setPlainText(
            "Extraction complete.\n"
            f"- Files scanned: {summary.scanned}\n"
            f"- Parsed OK: {summary.parsed_ok}\n"
            f"- Failed: {summary.parsed_failed}\n"
            f"- Output: {summary.written_path}\n"
        )
        self.extract_btn.setEnabled(True)

    def _extract_error(self, msg: str):
        self.result_area.clear()
        QMessageBox.critical(self, "Extraction Error", msg)
        self.extract_btn.setEnabled(True)

    # ---------------- Helpers ----------------
    def _catalog_config(self) -> WalkConfig | None:
        if self.current_catalog is None:
            return None
        return WalkConfig(separator=self.current_catalog.separator, max_nodes=default_config().max_nodes)

    def _clear_fields_ui(self):
        while self.fields_layout.count():
            item = self.fields_layout.takeAt(0)
            w = item.widget()
            if w:
                w.deleteLater()

    def _selected_fields(self) -> List[str]:
        return [path for path, cb in self.checkbox_map.items() if cb.isChecked()]
