# -*- coding: utf-8 -*-
"""
体素缓冲区访问（Model）。
把解码器给出的原始字节按头信息中的数据类型码解释为数值，只读。
"""

from typing import Union

import numpy as np

from .volume_header import VolumeHeader, VoxelDatatype


class VoxelBufferAccessor:
    """
    原始体素缓冲区的类型化只读访问。
    - 构造时按 datatype_code 分派到 VoxelDatatype，未知类型码抛出 UnsupportedDatatypeError
    - 末尾不足一个元素的字节被忽略
    """

    def __init__(self, header: VolumeHeader, raw: bytes):
        self._header = header
        self._datatype: VoxelDatatype = header.datatype
        dtype = self._datatype.numpy_dtype(header.byteorder)
        count = len(raw) // dtype.itemsize
        # frombuffer 基于 bytes 时天然只读
        self._values = np.frombuffer(raw, dtype=dtype, count=count)

    @property
    def header(self) -> VolumeHeader:
        return self._header

    @property
    def datatype(self) -> VoxelDatatype:
        return self._datatype

    @property
    def values(self) -> np.ndarray:
        """整个缓冲区的一维数组视图。"""
        return self._values

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def read(self, flat_offset: int) -> Union[int, float]:
        """按线性偏移读取单个体素值，整型返回 int，浮点返回 float。"""
        return self._values[flat_offset].item()
