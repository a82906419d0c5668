# -*- coding: utf-8 -*-
"""
Model 层异常类型。
渲染流程只捕获这里定义的异常；解码器自身的异常原样向上抛出。
"""


class ViewerError(Exception):
    """查看器内部可识别错误的基类。"""


class UnsupportedDatatypeError(ViewerError):
    """体素数据类型码不在支持的八种之内，本次渲染放弃绘制。"""

    def __init__(self, datatype_code: int):
        super().__init__(f"不支持的体素数据类型码：{datatype_code}")
        self.datatype_code = datatype_code
