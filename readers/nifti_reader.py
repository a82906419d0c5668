# -*- coding: utf-8 -*-
"""
NIfTI 解码器（基于 nibabel）。
只处理已完整读入内存的字节流：
- is_compressed / decompress：gzip 检测与解压
- is_nifti：NIfTI-1 / NIfTI-2 单文件或成对头的识别
- read_header：解析为 VolumeHeader
- read_image：按 vox_offset 与数据大小截取体素字节
头信息损坏时 nibabel 的异常原样抛出，由调用方决定是否处理。
"""

import gzip
import io
from typing import Optional, Type

import nibabel as nib
import numpy as np

from models import VolumeHeader

GZIP_MAGIC = b"\x1f\x8b"

# 按优先级尝试的头类型
_HEADER_CLASSES = (nib.Nifti1Header, nib.Nifti2Header)


def is_compressed(data: bytes) -> bool:
    """是否为 gzip 压缩流（.nii.gz）。"""
    return data[:2] == GZIP_MAGIC


def decompress(data: bytes) -> bytes:
    return gzip.decompress(data)


def _header_class(data: bytes) -> Optional[Type[nib.Nifti1Header]]:
    """返回能解析该字节流的 nibabel 头类型；不是 NIfTI 时返回 None。"""
    for klass in _HEADER_CLASSES:
        if not klass.may_contain_header(data[:klass.sizeof_hdr]):
            continue
        hdr = klass.from_fileobj(io.BytesIO(data[:klass.sizeof_hdr]), check=False)
        magic = hdr["magic"].item()
        if magic in (klass.single_magic, klass.pair_magic):
            return klass
    return None


def is_nifti(data: bytes) -> bool:
    return _header_class(data) is not None


def read_header(data: bytes) -> VolumeHeader:
    """解析头信息。调用前应先用 is_nifti 判断；否则抛出 ValueError。"""
    klass = _header_class(data)
    if klass is None:
        raise ValueError("输入不是 NIfTI 数据")
    hdr = klass.from_fileobj(io.BytesIO(data))
    return VolumeHeader(
        dims=tuple(int(d) for d in hdr["dim"]),
        datatype_code=int(hdr["datatype"]),
        bitpix=int(hdr["bitpix"]),
        vox_offset=int(hdr["vox_offset"]),
        byteorder=hdr.endianness,
    )


def read_image(header: VolumeHeader, data: bytes) -> bytes:
    """截取体素数据：data[vox_offset : vox_offset + prod(dims[1..ndim]) * bitpix / 8]。"""
    ndim = header.dims[0]
    voxel_count = int(np.prod(header.dims[1:ndim + 1], dtype=np.int64))
    image_size = voxel_count * header.bitpix // 8
    return data[header.vox_offset:header.vox_offset + image_size]
