# -*- coding: utf-8 -*-
"""
Model 层：应用核心数据与领域对象。
- AppState：全局应用状态（头信息、体素字节、当前层号）
- VolumeHeader / VoxelDatatype：体数据头信息与体素类型
- VoxelBufferAccessor / extract_slice：体素读取与切片提取
- map_pixel / map_grid：低字节灰度映射
- ZoomSelector：框选放大状态机
"""

from .app_state import AppState
from .errors import UnsupportedDatatypeError, ViewerError
from .intensity import map_grid, map_pixel
from .slice_extractor import SliceGrid, extract_slice
from .volume_header import VolumeHeader, VoxelDatatype
from .voxel_buffer import VoxelBufferAccessor
from .zoom_selector import SelectionRect, ZoomSelector, ZoomState

__all__ = [
    "AppState",
    "SelectionRect",
    "SliceGrid",
    "UnsupportedDatatypeError",
    "ViewerError",
    "VolumeHeader",
    "VoxelBufferAccessor",
    "VoxelDatatype",
    "ZoomSelector",
    "ZoomState",
    "extract_slice",
    "map_grid",
    "map_pixel",
]
