# -*- coding: utf-8 -*-
"""
灰度映射（Model）。
取原始体素值的低 8 位作为灰度（value & 0xFF），复制到 R/G/B，alpha 固定 0xFF。
不做窗宽窗位，也不按体数据实际动态范围归一化。
"""

from typing import Tuple, Union

import numpy as np

OPAQUE = 0xFF
_INT32_SPAN = float(2 ** 32)


def _low_byte(values: np.ndarray) -> np.ndarray:
    """按整数转换语义取低字节：浮点向零截断，NaN/±inf 视为 0。"""
    values = np.asarray(values)
    if values.dtype.kind == "f":
        values = np.nan_to_num(values.astype(np.float64), nan=0.0, posinf=0.0, neginf=0.0)
        # fmod 保留模 2^32 的余数，低 8 位不变且能安全转为 int64
        values = np.fmod(np.trunc(values), _INT32_SPAN)
    return (values.astype(np.int64) & 0xFF).astype(np.uint8)


def map_pixel(raw_value: Union[int, float]) -> Tuple[int, int, int, int]:
    """单个体素值 -> (r, g, b, a)。例如 300 -> (0x2C, 0x2C, 0x2C, 0xFF)。"""
    gray = int(_low_byte(np.asarray(raw_value)))
    return gray, gray, gray, OPAQUE


def map_grid(values: np.ndarray) -> np.ndarray:
    """(rows, cols) 体素数组 -> (rows, cols, 4) uint8 RGBA，逐像素结果与 map_pixel 相同。"""
    gray = _low_byte(values)
    rgba = np.empty(gray.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = gray
    rgba[..., 1] = gray
    rgba[..., 2] = gray
    rgba[..., 3] = OPAQUE
    return rgba
