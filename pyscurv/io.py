"""
Reading point clouds and reading/writing SCurV signatures.
"""
import os

import numpy as np
import open3d as o3d

from .config import SIGNATURE_SIZE
from .descriptor import SCurVSignature210
from .errors import MissingNormalsError
from .pointcloud import PointCloud

_PCD_HEADER = (
    "# .PCD v0.7 - Point Cloud Data file format\n"
    "VERSION 0.7\n"
    "FIELDS scurv\n"
    "SIZE 4\n"
    "TYPE F\n"
    f"COUNT {SIGNATURE_SIZE}\n"
    "WIDTH {count}\n"
    "HEIGHT 1\n"
    "VIEWPOINT 0 0 0 1 0 0 0\n"
    "POINTS {count}\n"
    "DATA ascii\n"
)


def load_cloud(filename):
    """
    Load a point cloud with normals (PLY, PCD, XYZN, ...).

    Raises:
        FileNotFoundError: the file does not exist
        MissingNormalsError: the file carries no normal field
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"Point cloud file not found: {filename}")
    cloud = PointCloud(o3d.io.read_point_cloud(filename))
    if len(cloud) == 0:
        raise ValueError(f"No points could be read from {filename}")
    if not cloud.has_normals():
        raise MissingNormalsError(f"The input dataset {filename} does not contain normal information")
    return cloud


def _as_matrix(signatures):
    if isinstance(signatures, SCurVSignature210):
        signatures = [signatures]
    return np.vstack([np.asarray(s, dtype=np.float64) for s in signatures])


def save_signature(filename, signatures):
    """
    Write signatures, one 210-value record per row.

    ``.pcd`` is written as an ASCII PCD file with a single ``scurv`` field,
    ``.npy`` with numpy, anything else as whitespace-separated text.
    """
    matrix = _as_matrix(signatures)
    ext = os.path.splitext(filename)[1].lower()
    if ext == '.pcd':
        with open(filename, 'w') as f:
            f.write(_PCD_HEADER.format(count=len(matrix)))
            for row in matrix:
                f.write(' '.join(f"{v:.8g}" for v in row) + '\n')
    elif ext == '.npy':
        np.save(filename, matrix)
    else:
        np.savetxt(filename, matrix)


def load_signature(filename):
    """Read signatures written by ``save_signature``; returns a list of SCurVSignature210."""
    ext = os.path.splitext(filename)[1].lower()
    if ext == '.pcd':
        with open(filename) as f:
            lines = f.read().splitlines()
        start = next(i for i, line in enumerate(lines) if line.startswith('DATA')) + 1
        matrix = np.array([[float(v) for v in line.split()] for line in lines[start:] if line.strip()])
    elif ext == '.npy':
        matrix = np.load(filename)
    else:
        matrix = np.loadtxt(filename, ndmin=2)
    return [SCurVSignature210(row) for row in np.atleast_2d(matrix)]
