# -*- coding: utf-8 -*-
"""
主窗口（View）。
仅负责布局、菜单、文件选择、层号滑条、放大开关与 ViewModel 的绑定；
业务逻辑与数据均由 ViewModel 提供。
"""

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from config import DEFAULT_CONFIG, ViewerConfig
from views.slice_view import SliceView

if TYPE_CHECKING:
    from viewmodels.main_view_model import MainViewModel


# 深色医疗主题 QSS
STYLESHEET = """
QMainWindow { background-color: #1E1E2E; color: #E0E0E0; }
QLabel { color: #E0E0E0; }
QFrame { background-color: #252535; border: 1px solid #303040; }
QSlider::groove:horizontal { background: #303040; height: 6px; }
QSlider::handle:horizontal { background: #3A86FF; width: 12px; border-radius: 6px; }
QPushButton {
    background-color: #3A86FF; color: white; border-radius: 4px; padding: 4px 10px;
}
QPushButton:hover { background-color: #2563EB; }
"""

ZOOM_ON_TEXT = "Disable Zoom"
ZOOM_OFF_TEXT = "Enable Zoom"


class MainWindow(QMainWindow):
    """
    主窗口 View。
    - 顶部文件选择，中间固定尺寸切片画布，下方层号滑条与放大开关
    - 通过 ViewModel 读取文件、切换层号与放大模式
    """

    def __init__(self, view_model: "MainViewModel", config: ViewerConfig = DEFAULT_CONFIG, parent=None):
        super().__init__(parent)
        self._view_model = view_model
        self._config = config
        self.setWindowTitle(config.window_title)
        self.setStyleSheet(STYLESHEET)

        self._create_menu()
        central = QWidget(self)
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        layout.addLayout(self._create_file_row())
        self._slice_view = SliceView(self._view_model)
        layout.addWidget(self._slice_view, 0, Qt.AlignHCenter)
        layout.addLayout(self._create_control_row())

        status = QStatusBar()
        status.setStyleSheet("color: #E0E0E0; background-color: #151521;")
        self.setStatusBar(status)
        self.statusBar().showMessage("就绪")

        # 绑定 ViewModel 信号
        self._view_model.slice_range_changed.connect(self._on_slice_range_changed)
        self._view_model.slice_changed.connect(self._on_slice_changed)
        self._view_model.zoom_changed.connect(self._on_zoom_changed)
        self._view_model.status_message.connect(self.statusBar().showMessage)

    @property
    def slice_slider(self) -> QSlider:
        return self._slider

    @property
    def zoom_button(self) -> QPushButton:
        return self._zoom_button

    def _create_menu(self) -> None:
        """构建顶部菜单栏。"""
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("文件")
        open_action = QAction("打开文件", self)
        open_action.triggered.connect(self._on_open_file)
        file_menu.addAction(open_action)
        exit_action = QAction("退出", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)
        help_menu = menu_bar.addMenu("帮助")
        about_action = QAction("关于", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _create_file_row(self) -> QHBoxLayout:
        """文件选择行：按钮 + 当前文件名。"""
        row = QHBoxLayout()
        row.addWidget(QLabel("选择文件："))
        open_button = QPushButton("浏览…")
        open_button.clicked.connect(self._on_open_file)
        row.addWidget(open_button)
        self._label_file = QLabel("-")
        row.addWidget(self._label_file, 1)
        return row

    def _create_control_row(self) -> QVBoxLayout:
        """层号滑条与放大开关。"""
        column = QVBoxLayout()
        lo, hi = self._view_model.get_slice_range()
        self._slider = QSlider(Qt.Horizontal)
        self._slider.setMinimum(lo)
        self._slider.setMaximum(hi)
        self._slider.setValue(self._view_model.app_state.slice_index)
        self._slider.valueChanged.connect(self._view_model.set_slice)
        column.addWidget(self._slider)
        self._label_slice = QLabel(self._slice_text(self._slider.value()))
        column.addWidget(self._label_slice)
        self._zoom_button = QPushButton(ZOOM_OFF_TEXT)
        self._zoom_button.clicked.connect(self._view_model.toggle_zoom)
        column.addWidget(self._zoom_button, 0, Qt.AlignLeft)
        return column

    def _slice_text(self, index: int) -> str:
        return f"层号：{index} / {self._slider.maximum()}"

    # ---------- 菜单与按钮槽 ----------

    def _on_open_file(self) -> None:
        """选择单个文件（不限扩展名）后交给 ViewModel 读取。"""
        file_path, _ = QFileDialog.getOpenFileName(self, "选择文件", "", self._config.file_filter)
        if not file_path:
            return
        self._label_file.setText(Path(file_path).name)
        self._view_model.open_file(Path(file_path))

    def _show_about(self) -> None:
        QMessageBox.information(
            self, "关于",
            "NIfTI 切片浏览\n\n按层浏览 3D/4D NIfTI 体数据，支持框选放大。\n采用 MVVM 架构。",
        )

    # ---------- ViewModel 信号槽 ----------

    def _on_slice_range_changed(self, lo: int, hi: int) -> None:
        """新体数据：更新滑条范围（屏蔽信号，避免重复渲染）。"""
        self._slider.blockSignals(True)
        self._slider.setRange(lo, hi)
        self._slider.blockSignals(False)

    def _on_slice_changed(self, index: int) -> None:
        """层号变化：同步滑条与层号文字。"""
        self._slider.blockSignals(True)
        self._slider.setValue(index)
        self._slider.blockSignals(False)
        self._label_slice.setText(self._slice_text(index))

    def _on_zoom_changed(self, enabled: bool) -> None:
        self._zoom_button.setText(ZOOM_ON_TEXT if enabled else ZOOM_OFF_TEXT)
