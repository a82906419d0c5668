# -*- coding: utf-8 -*-
"""
NIfTI 切片浏览程序入口。
"""

import logging
import sys

from PySide6.QtWidgets import QApplication

from config import DEFAULT_CONFIG, ViewerConfig
from viewmodels import MainViewModel
from views import MainWindow


def setup_logging(config: ViewerConfig) -> None:
    """日志输出到 stdout。"""
    logging.basicConfig(
        level=config.log_level,
        format=config.log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main():
    config = DEFAULT_CONFIG
    setup_logging(config)
    app = QApplication(sys.argv)
    app.setApplicationName(config.window_title)
    view_model = MainViewModel(config)
    window = MainWindow(view_model, config)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
