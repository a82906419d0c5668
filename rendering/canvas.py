# -*- coding: utf-8 -*-
"""
画布渲染。
绘制表面为 RGBA8888 的 QImage，逻辑尺寸固定（默认 512x512），与切片实际尺寸无关：
- render：像素缓冲区从原点 (0, 0) 直接覆盖写入，不缩放，未覆盖区域保持原内容
- magnify：裁剪选框区域并拉伸铺满整个表面
"""

from typing import Callable, Tuple, Union

import numpy as np
from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QColor, QImage, QPainter

PixelSource = Union[np.ndarray, Callable[[int, int], Tuple[int, int, int, int]]]


def new_surface(width: int, height: int) -> QImage:
    """新建不透明黑色绘制表面。"""
    surface = QImage(width, height, QImage.Format_RGBA8888)
    surface.fill(QColor(0, 0, 0, 255))
    return surface


def _pixel_buffer(cols: int, rows: int, pixel_source: PixelSource) -> np.ndarray:
    """分配 rows x cols x 4 字节缓冲区，按先行后列的顺序填充。"""
    if callable(pixel_source):
        buffer = np.empty((rows, cols, 4), dtype=np.uint8)
        for row in range(rows):
            for col in range(cols):
                buffer[row, col] = pixel_source(row, col)
        return buffer
    return np.ascontiguousarray(pixel_source, dtype=np.uint8).reshape(rows, cols, 4)


def _blit(surface: QImage, image: QImage) -> None:
    painter = QPainter(surface)
    # Source 模式：直接替换像素，不做 alpha 混合
    painter.setCompositionMode(QPainter.CompositionMode_Source)
    painter.drawImage(0, 0, image)
    painter.end()


def render(surface: QImage, cols: int, rows: int, pixel_source: PixelSource) -> None:
    """
    将 cols x rows 的像素写到表面左上角。
    pixel_source 可以是 (row, col) -> (r, g, b, a) 的回调，也可以是现成的 (rows, cols, 4) 数组。
    """
    if cols <= 0 or rows <= 0:
        return
    buffer = _pixel_buffer(cols, rows, pixel_source)
    # copy() 让 QImage 持有自己的数据，不再引用 numpy 缓冲区
    image = QImage(buffer.data, cols, rows, cols * 4, QImage.Format_RGBA8888).copy()
    _blit(surface, image)


def magnify(surface: QImage, box: Tuple[int, int, int, int]) -> None:
    """
    裁剪 box=(left, top, right, bottom) 区域，拉伸到整个表面尺寸后整体替换表面内容。
    使用最近邻插值，同样输入得到逐字节相同的结果。
    """
    left, top, right, bottom = box
    crop = surface.copy(QRect(left, top, right - left, bottom - top))
    zoomed = crop.scaled(
        surface.width(),
        surface.height(),
        Qt.IgnoreAspectRatio,
        Qt.FastTransformation,
    )
    _blit(surface, zoomed)


def surface_to_array(surface: QImage) -> np.ndarray:
    """复制表面像素为 (height, width, 4) uint8 数组。"""
    width, height = surface.width(), surface.height()
    bits = surface.constBits()
    # 每行可能有对齐填充，按 bytesPerLine 切片
    raw = np.frombuffer(bits, dtype=np.uint8, count=surface.sizeInBytes())
    raw = raw.reshape(height, surface.bytesPerLine())
    return raw[:, :width * 4].reshape(height, width, 4).copy()
