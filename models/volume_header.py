# -*- coding: utf-8 -*-
"""
体数据头信息（Model）。
- VoxelDatatype：八种体素数值类型的标签枚举，携带位宽与符号信息
- VolumeHeader：解码器产出的只读头信息（dims、数据类型码、体素偏移等）
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from .errors import UnsupportedDatatypeError


class VoxelDatatype(Enum):
    """
    NIfTI-1 数据类型码与数值表示的对应关系。
    值为 (code, width, signed, kind)，width 单位为字节，kind 为 "i"/"u"/"f"。
    """

    UINT8 = (2, 1, False, "u")
    INT16 = (4, 2, True, "i")
    INT32 = (8, 4, True, "i")
    FLOAT32 = (16, 4, True, "f")
    FLOAT64 = (64, 8, True, "f")
    INT8 = (256, 1, True, "i")
    UINT16 = (512, 2, False, "u")
    UINT32 = (768, 4, False, "u")

    def __init__(self, code: int, width: int, signed: bool, kind: str):
        self.code = code
        self.width = width
        self.signed = signed
        self.kind = kind

    @property
    def is_float(self) -> bool:
        return self.kind == "f"

    def numpy_dtype(self, byteorder: str = "<") -> np.dtype:
        """按给定字节序返回对应的 numpy dtype。"""
        return np.dtype(f"{byteorder}{self.kind}{self.width}")

    @classmethod
    def from_code(cls, code: int) -> "VoxelDatatype":
        """由数据类型码查找枚举；未知类型码抛出 UnsupportedDatatypeError。"""
        for member in cls:
            if member.code == code:
                return member
        raise UnsupportedDatatypeError(code)


@dataclass(frozen=True)
class VolumeHeader:
    """
    解码后的体数据头信息，创建后不可变。
    - dims 与 NIfTI dim 数组一致：dims[0] 为维数，dims[1] 列数，dims[2] 行数，
      dims[3] 层数，dims[4]（可选）为时间/体数
    - datatype_code 为原始类型码，是否受支持在读取体素时才判定
    """

    dims: Tuple[int, ...]
    datatype_code: int
    bitpix: int = 0
    vox_offset: int = 0
    # "<" 小端 / ">" 大端
    byteorder: str = "<"

    def _dim(self, axis: int) -> int:
        if len(self.dims) > axis and self.dims[0] >= axis:
            return max(int(self.dims[axis]), 1)
        return 1

    @property
    def cols(self) -> int:
        return self._dim(1)

    @property
    def rows(self) -> int:
        return self._dim(2)

    @property
    def slice_count(self) -> int:
        return self._dim(3)

    @property
    def volume_count(self) -> int:
        return self._dim(4)

    @property
    def slice_size(self) -> int:
        """单层体素数 cols * rows。"""
        return self.cols * self.rows

    @property
    def datatype(self) -> VoxelDatatype:
        return VoxelDatatype.from_code(self.datatype_code)

    def initial_slice_index(self) -> int:
        """新体数据加载后的初始层号：round(dims[3] / 2)（半数向上取整），并夹到有效范围内。"""
        index = math.floor(self.slice_count / 2 + 0.5)
        return int(np.clip(index, 0, self.slice_count - 1))
