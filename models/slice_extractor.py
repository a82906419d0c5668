# -*- coding: utf-8 -*-
"""
切片提取（Model）。
按层号从扁平体素缓冲区中取出一层，行优先、自上而下，与绘制表面坐标一致。
"""

from typing import Union

import numpy as np

from .voxel_buffer import VoxelBufferAccessor
from .volume_header import VolumeHeader


class SliceGrid:
    """单层体素网格：value_at(row, col) 读取线性偏移 slice_offset + row*cols + col。"""

    def __init__(self, accessor: VoxelBufferAccessor, cols: int, rows: int, slice_offset: int):
        self._accessor = accessor
        self.cols = cols
        self.rows = rows
        self.slice_offset = slice_offset

    def value_at(self, row: int, col: int) -> Union[int, float]:
        return self._accessor.read(self.slice_offset + row * self.cols + col)

    @property
    def values(self) -> np.ndarray:
        """(rows, cols) 形状的切片视图，不复制数据。"""
        flat = self._accessor.values[self.slice_offset:self.slice_offset + self.cols * self.rows]
        return flat.reshape(self.rows, self.cols)


def extract_slice(header: VolumeHeader, accessor: VoxelBufferAccessor, slice_index: int) -> SliceGrid:
    """
    取出第 slice_index 层。
    不检查层号范围，调用方（滑条范围 / ViewModel）负责夹到 [0, dims[3]-1]。
    """
    cols = header.cols
    rows = header.rows
    slice_size = cols * rows
    slice_offset = slice_size * slice_index
    return SliceGrid(accessor, cols, rows, slice_offset)
