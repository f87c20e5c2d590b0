from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from leafwalk.config import default_config

from .extract_panel import ExtractPanel
from .inspect_panel import InspectPanel


class MainWindow(QMainWindow):
    """Mode bar on top, one stacked page per mode."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Leafwalk")
        self.resize(1100, 700)

        self.inspect_panel = InspectPanel()
        self.extract_panel = ExtractPanel()
        modes = [("Inspect", self.inspect_panel), ("Extract", self.extract_panel)]

        self.stack = QStackedWidget()
        self.mode_buttons = QButtonGroup(self)
        self.mode_buttons.setExclusive(True)

        bar = QHBoxLayout()
        for index, (label, panel) in enumerate(modes):
            self.stack.addWidget(panel)
            button = QPushButton(label)
            button.setCheckable(True)
            self.mode_buttons.addButton(button, index)
            bar.addWidget(button)
        bar.addStretch()
        self.mode_buttons.idClicked.connect(self.show_panel)

        root = QWidget()
        layout = QVBoxLayout(root)
        layout.addLayout(bar)
        layout.addWidget(self.stack)
        self.setCentralWidget(root)

        cfg = default_config()
        limit = cfg.max_nodes if cfg.max_nodes is not None else "unbounded"
        self.statusBar().showMessage(f"separator {cfg.separator!r}, node limit {limit}")

        self.show_panel(0)

    def show_panel(self, index: int):
        self.stack.setCurrentIndex(index)
        self.mode_buttons.button(index).setChecked(True)
