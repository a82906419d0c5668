# -*- coding: utf-8 -*-
"""
解码器协作方：NIfTI 字节流的识别、解压与头信息 / 图像数据读取。
"""

from .nifti_reader import decompress, is_compressed, is_nifti, read_header, read_image

__all__ = ["decompress", "is_compressed", "is_nifti", "read_header", "read_image"]
