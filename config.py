# -*- coding: utf-8 -*-
"""
查看器配置。
画布尺寸、滑条默认范围、日志等常量集中在这里，由 main.py 传给 ViewModel 与 View。
"""

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class ViewerConfig:
    """查看器运行参数。"""

    # 绘制表面逻辑尺寸，与体数据切片尺寸无关
    canvas_width: int = 512
    canvas_height: int = 512
    # 未加载体数据时滑条的最大值
    default_slider_max: int = 100
    window_title: str = "NIfTI 切片浏览"
    # 文件选择不限扩展名
    file_filter: str = "所有文件 (*)"
    log_level: int = logging.INFO
    log_format: str = "%(asctime)s - %(levelname)s - %(message)s"


DEFAULT_CONFIG = ViewerConfig()
