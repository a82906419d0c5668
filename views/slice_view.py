# -*- coding: utf-8 -*-
"""
切片画布视图（View）。
仅负责展示与交互：显示 ViewModel 的绘制表面，左键按下/拖拽/松开转发给 ViewModel 的框选放大；
拖拽中的选框轮廓用 QRubberBand 叠加显示，不写入绘制表面。
"""

from typing import TYPE_CHECKING, Tuple

from PySide6.QtCore import QPoint, QPointF, QRect, Qt
from PySide6.QtGui import QMouseEvent, QPixmap
from PySide6.QtWidgets import QFrame, QLabel, QRubberBand, QVBoxLayout

from models import ZoomState

if TYPE_CHECKING:
    from viewmodels.main_view_model import MainViewModel


class SliceView(QFrame):
    """
    固定尺寸的切片画布。
    - 通过 ViewModel 获取绘制表面（QImage）并按原始像素显示，不缩放
    - 左键事件坐标换算为画布内坐标后交给 ViewModel
    """

    def __init__(self, view_model: "MainViewModel", parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        self.setObjectName("SliceView")

        self._view_model = view_model
        surface = view_model.surface

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._image_label = QLabel()
        # 表面左上角与画布原点对齐，画布坐标即表面像素坐标
        self._image_label.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        # QLabel 也是 QFrame，去掉主题边框，否则画布坐标会偏移 1 像素
        self._image_label.setStyleSheet("border: none;")
        self._image_label.setFixedSize(surface.width(), surface.height())
        layout.addWidget(self._image_label)

        self._rubber_band = QRubberBand(QRubberBand.Rectangle, self._image_label)
        self._rubber_band.hide()

        self._view_model.surface_changed.connect(self.refresh_display)
        self._view_model.selection_changed.connect(self._on_selection_changed)
        self.refresh_display()

    def refresh_display(self) -> None:
        """把当前绘制表面显示到 Label 上。"""
        self._image_label.setPixmap(QPixmap.fromImage(self._view_model.surface))

    def _on_selection_changed(self) -> None:
        """拖拽中显示归一化后的选框轮廓，其余状态隐藏。"""
        selector = self._view_model.zoom_selector
        if selector.state is not ZoomState.DRAGGING or selector.selection is None:
            self._rubber_band.hide()
            return
        left, top, right, bottom = selector.selection.normalized()
        self._rubber_band.setGeometry(QRect(int(left), int(top), int(right - left), int(bottom - top)))
        self._rubber_band.show()

    def _pos_in_image_label(self, pos: QPointF) -> Tuple[int, int]:
        """将 SliceView 内的坐标转换为图像 Label（即画布）内的坐标。"""
        p = self._image_label.mapFrom(self, QPoint(int(pos.x()), int(pos.y())))
        return p.x(), p.y()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """左键按下：开始框选（仅放大模式下生效，由 ViewModel 判断）。"""
        if event.button() == Qt.LeftButton:
            self._view_model.pointer_down(*self._pos_in_image_label(event.position()))
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """左键拖拽：更新选框。"""
        if event.buttons() & Qt.LeftButton:
            self._view_model.pointer_move(*self._pos_in_image_label(event.position()))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """左键松开：结束框选并放大。"""
        if event.button() == Qt.LeftButton:
            self._view_model.pointer_up()
            event.accept()
            return
        super().mouseReleaseEvent(event)
