# -*- coding: utf-8 -*-
"""
渲染层：把映射后的像素写入固定尺寸的绘制表面（QImage），以及框选区域的放大。
"""

from .canvas import magnify, new_surface, render, surface_to_array

__all__ = ["magnify", "new_surface", "render", "surface_to_array"]
