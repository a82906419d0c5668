import nibabel as nib
import numpy as np


def nifti_bytes(volume, dtype=np.int16):
    """Serialize a (slices, rows, cols) array as single-file NIfTI-1 bytes."""
    data = np.asarray(volume, dtype=dtype).transpose(2, 1, 0)
    return nib.Nifti1Image(data, np.eye(4)).to_bytes()


def gray_volume(slices=4, rows=8, cols=8):
    """Each voxel value is slice*64 + row*8 + col, within one byte."""
    return np.arange(slices * rows * cols).reshape(slices, rows, cols) % 256
