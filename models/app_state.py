# -*- coding: utf-8 -*-
"""
全局应用状态（Model）。
由 ViewModel 读写，View 通过 ViewModel 间接访问。
"""

from dataclasses import dataclass
from typing import Optional

from .volume_header import VolumeHeader
from .voxel_buffer import VoxelBufferAccessor


@dataclass
class AppState:
    """
    全局应用状态。
    - header / image：当前体数据头信息与解码后的原始字节，未加载时为 None
    - slice_index：当前层号，始终落在 [0, dims[3]-1]
    - load_sequence：最近一次打开文件请求的序号，用于丢弃过期的读取结果
    """

    header: Optional[VolumeHeader] = None
    image: Optional[bytes] = None
    slice_index: int = 0
    load_sequence: int = 0

    @property
    def loaded(self) -> bool:
        return self.header is not None and self.image is not None

    def accessor(self) -> VoxelBufferAccessor:
        """按当前头信息构造体素访问器；类型码不受支持时抛出 UnsupportedDatatypeError。"""
        return VoxelBufferAccessor(self.header, self.image)
