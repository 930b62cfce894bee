"""
PointCloud wrapper holding points and normals in an Open3D point cloud.
"""
import copy

import open3d as o3d
import numpy as np


class PointCloud:
    def __init__(self, o3d_pcd):
        """Initialize with an Open3D PointCloud object."""
        self.o3d_pcd = o3d_pcd

    @classmethod
    def from_arrays(cls, points, normals=None):
        """Build from (N, 3) arrays of positions and, optionally, normals."""
        pcd = o3d.geometry.PointCloud()
        pcd.points = o3d.utility.Vector3dVector(np.asarray(points, dtype=np.float64))
        if normals is not None:
            pcd.normals = o3d.utility.Vector3dVector(np.asarray(normals, dtype=np.float64))
        return cls(pcd)

    def __len__(self):
        return len(self.o3d_pcd.points)

    def has_normals(self):
        return self.o3d_pcd.has_normals()

    def estimate_normals(self, radius=0.05, max_nn=30):
        """Estimate normals for clouds loaded without them."""
        self.o3d_pcd.estimate_normals(
            search_param=o3d.geometry.KDTreeSearchParamHybrid(radius=radius, max_nn=max_nn)
        )

    def to_numpy(self):
        """Return points as Nx3 numpy array (copy)."""
        return np.array(self.o3d_pcd.points, dtype=np.float64)

    def normals_numpy(self):
        """Return normals as Nx3 numpy array (copy), or None when the cloud has none."""
        if not self.has_normals():
            return None
        return np.array(self.o3d_pcd.normals, dtype=np.float64)

    def set_points(self, points):
        """Replace the positions in place; normals are kept."""
        self.o3d_pcd.points = o3d.utility.Vector3dVector(np.asarray(points, dtype=np.float64))

    def copy(self):
        return PointCloud(copy.deepcopy(self.o3d_pcd))
