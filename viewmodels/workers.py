# -*- coding: utf-8 -*-
"""
后台读取线程。
整文件读入后连同请求序号一起发回 GUI 线程，解压与解析都在 ViewModel.load_bytes 中完成；不做流式解码。
"""

import logging
from pathlib import Path

from PySide6.QtCore import QThread, Signal


class FileLoadWorker(QThread):
    """读取单个文件的后台线程，字节原样发出。"""

    # (请求序号, 完整字节)
    loaded = Signal(int, object)
    # (请求序号, 错误信息)
    failed = Signal(int, str)

    def __init__(self, path: Path, sequence: int, parent=None):
        super().__init__(parent)
        self.path = Path(path)
        self.sequence = sequence

    def run(self):
        try:
            data = self.path.read_bytes()
        except OSError as e:
            logging.error(f"读取文件失败：{self.path}：{e}")
            self.failed.emit(self.sequence, str(e))
            return
        logging.info(f"已读取 {self.path}（{len(data)} 字节）")
        self.loaded.emit(self.sequence, data)
