# -*- coding: utf-8 -*-
"""
ViewModel 层：连接 Model 与 View，暴露状态与命令，驱动 UI 更新。
- MainViewModel：体数据加载、层号、框选放大与渲染，通过信号通知 View 刷新。
- FileLoadWorker：后台读取文件的线程。
"""

from .main_view_model import MainViewModel
from .workers import FileLoadWorker

__all__ = ["FileLoadWorker", "MainViewModel"]
