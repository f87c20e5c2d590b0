from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QLineEdit, QFileDialog,
    QHBoxLayout, QTextEdit, QListWidget, QMessageBox, QSplitter
)
from PySide6.QtCore import Qt

from leafwalk.config import WalkConfig, default_config
from leafwalk.paths.dot_walker import get_path
from leafwalk.paths.terminal_fields import terminal_fields
from leafwalk.utils.json_utils import RecordLoadError, dumps, loads_records


class InspectPanel(QWidget):
    def __init__(self):
        super().__init__()

        self.value = None

        # Sample input
        load_btn = QPushButton("Load Sample File")
        load_btn.clicked.connect(self.load_sample_file)
        analyze_btn = QPushButton("List Leaf Paths")
        analyze_btn.clicked.connect(self.list_paths)

        self.separator_input = QLineEdit(default_config().separator)
        self.separator_input.setMaximumWidth(60)

        top_layout = QHBoxLayout()
        top_layout.addWidget(QLabel("Sample"))
        top_layout.addStretch()
        top_layout.addWidget(QLabel("Separator:"))
        top_layout.addWidget(self.separator_input)
        top_layout.addWidget(load_btn)
        top_layout.addWidget(analyze_btn)

        self.sample_text = QTextEdit()
        self.sample_text.setAcceptRichText(False)
        self.sample_text.setPlaceholderText("Paste a JSON document here...")

        # Paths + evaluation
        self.paths_list = QListWidget()
        self.paths_list.itemClicked.connect(lambda item: self.path_input.setText(item.text()))

        self.path_input = QLineEdit()
        self.path_input.setPlaceholderText("Path to evaluate, e.g. Contents.Key")
        eval_btn = QPushButton("Get")
        eval_btn.clicked.connect(self.evaluate_path)
        self.path_input.returnPressed.connect(self.evaluate_path)

        eval_layout = QHBoxLayout()
        eval_layout.addWidget(self.path_input)
        eval_layout.addWidget(eval_btn)

        self.result_area = QTextEdit()
        self.result_area.setReadOnly(True)
        self.result_area.setPlaceholderText("Path value will appear here...")

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addLayout(eval_layout)
        right_layout.addWidget(self.result_area)

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self.paths_list)
        splitter.addWidget(right)

        # Layout assembly
        layout = QVBoxLayout()
        layout.addWidget(QLabel("Inspect Panel"))
        layout.addLayout(top_layout)
        layout.addWidget(self.sample_text)
        layout.addWidget(splitter)
        self.setLayout(layout)

    def load_sample_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Sample", "", "JSON / Logs (*.json *.jsonl *.log *.txt);;All Files (*.*)")
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                self.sample_text.setPlainText(f.read())
        except OSError as e:
            QMessageBox.critical(self, "File Error", str(e))

    def _config(self) -> WalkConfig:
        return WalkConfig(separator=self.separator_input.text() or ".", max_nodes=default_config().max_nodes)

    def _parse_sample(self) -> bool:
        try:
            self.value = loads_records(self.sample_text.toPlainText())
            return True
        except RecordLoadError as e:
            QMessageBox.warning(self, "Invalid Sample", str(e))
            return False

    def list_paths(self):
        if not self._parse_sample():
            return
        try:
            paths = terminal_fields(self.value, self._config())
        except Exception as e:
            QMessageBox.critical(self, "Traversal Error", str(e))
            return

        self.paths_list.clear()
        self.paths_list.addItems(paths)
        if not paths:
            self.result_area.setPlainText("(No leaf paths: the sample is not an object or holds only empty arrays)")

    def evaluate_path(self):
        if not self._parse_sample():
            return
        path = self.path_input.text().strip()
        try:
            result = get_path(self.value, path, self._config())
        except ValueError as e:
            QMessageBox.critical(self, "Invalid Separator", str(e))
            return
        self.result_area.setPlainText(dumps(result))
