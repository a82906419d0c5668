# -*- coding: utf-8 -*-
"""
View 层：界面展示与用户交互，不包含业务逻辑。
- MainWindow：主窗口（文件选择、切片画布、层号滑条、放大开关）
- SliceView：固定尺寸的切片画布，转发框选事件
"""

from .main_window import MainWindow
from .slice_view import SliceView

__all__ = ["MainWindow", "SliceView"]
