# app.py — PanelCalc desktop shell (PySide6)
# ---------------------------------------------------------------------
# - Input box (monospace) | Results box (rich text), resizable split
# - Process Order (Ctrl+Return) runs engine.aggregate_order
# - Copy to Clipboard copies only the panel lines of the last report
# - Every processed order is written to the ledger (lore/lorekeeper.py)

import sys
from pathlib import Path

try:
    APP_DIR = str(Path(__file__).resolve().parent)
except NameError:
    APP_DIR = str(Path.cwd())
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

from PySide6.QtCore import Qt, QSettings, QTimer
from PySide6.QtGui import QFont, QFontDatabase, QKeySequence, QShortcut, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QPlainTextEdit, QTextEdit, QSplitter, QStyle)

from core.config import load_config
from core.model import Report
from engine import aggregate_order
from lore import lorekeeper

SETTINGS_ORG = "PanelCalc"
SETTINGS_APP = "PanelCalc"


def _char_format(style: str, mono_font: QFont) -> QTextCharFormat:
    fmt = QTextCharFormat()
    if style == "mono":
        fmt.setFont(mono_font)
    if style in ("bold", "bold_italic"):
        fmt.setFontWeight(QFont.Weight.Bold)
    if style == "bold_italic":
        fmt.setFontItalic(True)
    return fmt


def _section_label(text: str) -> QLabel:
    lbl = QLabel(text)
    f = lbl.font()
    f.setBold(True)
    lbl.setFont(f)
    return lbl


class Main(QMainWindow):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cfg = load_config()
        self._last_result = None

        self.setWindowTitle(self.cfg.window_title())
        self.resize(*self.cfg.window_size())

        self._mono = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)

        # Input area
        self.input = QPlainTextEdit()
        self.input.setPlaceholderText(self.cfg.placeholder())
        self.input.setFont(self._mono)

        # Output area
        self.output = QTextEdit()
        self.output.setReadOnly(True)
        self.output.setLineWrapMode(QTextEdit.LineWrapMode.WidgetWidth)
        self.output.setPlainText(self.cfg.initial_output())

        topw = QWidget()
        top = QVBoxLayout(topw)
        top.setContentsMargins(0, 0, 0, 0)
        top.addWidget(_section_label("Enter Panel List:"))
        top.addWidget(self.input, 1)

        bottomw = QWidget()
        bottom = QVBoxLayout(bottomw)
        bottom.setContentsMargins(0, 0, 0, 0)
        bottom.addWidget(_section_label("Results:"))
        bottom.addWidget(self.output, 1)

        self.split = QSplitter(Qt.Orientation.Vertical)
        self.split.setChildrenCollapsible(False)
        self.split.addWidget(topw)
        self.split.addWidget(bottomw)

        # Buttons side by side
        icons = self.style()
        self.process_btn = QPushButton(icons.standardIcon(QStyle.StandardPixmap.SP_DialogApplyButton), "Process Order")
        self.process_btn.setDefault(True)
        self.process_btn.clicked.connect(self.process_order)
        self.copy_btn = QPushButton(icons.standardIcon(QStyle.StandardPixmap.SP_FileDialogContentsView), "Copy to Clipboard")
        self.copy_btn.clicked.connect(self.copy_panel_lines)

        buttons = QHBoxLayout()
        buttons.addWidget(self.process_btn)
        buttons.addWidget(self.copy_btn)
        buttons.addStretch(1)

        self.cw = QWidget()
        root_layout = QVBoxLayout(self.cw)
        root_layout.setContentsMargins(10, 10, 10, 10)
        root_layout.addWidget(self.split, 1)
        root_layout.addLayout(buttons)
        self.setCentralWidget(self.cw)

        self._run_shortcut = QShortcut(QKeySequence("Ctrl+Return"), self)
        self._run_shortcut.activated.connect(self.process_order)

        self._restore_geometry()
        # splitter sizes need a laid-out window height
        QTimer.singleShot(0, self._apply_split_ratio)

        try:
            lorekeeper.log_event("app_started", {"config_version": self.cfg.version})
            lorekeeper.log_app_event("app started", [f"config version: {self.cfg.version}"])
        except OSError as e:
            lorekeeper.soft_fail("app_started", e)

    # ---- geometry -------------------------------------------------------
    def _apply_split_ratio(self):
        h = max(1, self.split.height())
        top = int(h * self.cfg.split_ratio())
        self.split.setSizes([top, h - top])

    def _restore_geometry(self):
        s = QSettings(SETTINGS_ORG, SETTINGS_APP)
        if (geo := s.value("main/geometry", None)) is not None:
            self.restoreGeometry(geo)

    def closeEvent(self, ev):
        try:
            s = QSettings(SETTINGS_ORG, SETTINGS_APP)
            s.setValue("main/geometry", self.saveGeometry())
            lorekeeper.log_event("app_closing")
        except OSError as e:
            lorekeeper.soft_fail("closeEvent", e)
        finally:
            super().closeEvent(ev)

    # ---- actions --------------------------------------------------------
    def process_order(self):
        result = aggregate_order(self.input.toPlainText(), self.cfg.report_labels())
        self._last_result = result
        self.render_result(result)
        try:
            lorekeeper.record_order(result)
        except OSError as e:
            lorekeeper.soft_fail("record_order", e)

    def render_result(self, result):
        self.output.clear()
        cur = self.output.textCursor()
        cur.movePosition(QTextCursor.MoveOperation.Start)
        for text, style in result.segments():
            cur.insertText(text, _char_format(style, self._mono))
        self.output.moveCursor(QTextCursor.MoveOperation.Start)

    def copy_panel_lines(self):
        if not isinstance(self._last_result, Report):
            return
        QApplication.clipboard().setText(self._last_result.clipboard_text())
        self.statusBar().showMessage(f"Copied {len(self._last_result.lines)} panel line(s).", 3000)


def main():
    app = QApplication.instance() or QApplication(sys.argv)
    w = Main()
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
