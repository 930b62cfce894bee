"""
Nearest-neighbour search over a point set.

A search method is built over an (N, 3) array and answers k-nearest queries
with original point indices in ascending distance order.
"""
import numpy as np
import open3d as o3d
from scipy.spatial import KDTree


class KDTreeSearch:
    """k-nearest-neighbour search backed by ``scipy.spatial.KDTree``."""

    def __init__(self, points, workers=-1):
        """
        Args:
            points: (N, 3) numpy array
            workers: parallel workers for batched queries (-1 uses all cores)
        """
        self.points = np.asarray(points, dtype=np.float64)
        self.workers = workers
        self.tree = KDTree(self.points)

    def __len__(self):
        return len(self.points)

    def neighbors(self, query_point, k):
        """
        The k points nearest to ``query_point``.

        Returns:
            (indices, distances): two length-k arrays, nearest first
        """
        distances, indices = self.tree.query(np.asarray(query_point, dtype=np.float64), k=[*range(1, k + 1)])
        return np.asarray(indices, dtype=np.intp), np.asarray(distances)

    def knn(self, query_points, k):
        """
        Batched ``neighbors`` for an (M, 3) array.

        Returns:
            (indices, distances): two (M, k) arrays
        """
        distances, indices = self.tree.query(
            np.asarray(query_points, dtype=np.float64), k=[*range(1, k + 1)], workers=self.workers
        )
        return np.asarray(indices, dtype=np.intp), np.asarray(distances)


class Open3DSearch:
    """k-nearest-neighbour search backed by Open3D's ``KDTreeFlann``.

    Queries run one point at a time; ``workers`` is accepted so both search
    methods share a constructor signature, and is ignored.
    """

    def __init__(self, points, workers=None):
        self.points = np.asarray(points, dtype=np.float64)
        pcd = o3d.geometry.PointCloud()
        pcd.points = o3d.utility.Vector3dVector(self.points)
        self.tree = o3d.geometry.KDTreeFlann(pcd)

    def __len__(self):
        return len(self.points)

    def neighbors(self, query_point, k):
        _, idx, sq_dists = self.tree.search_knn_vector_3d(np.asarray(query_point, dtype=np.float64), k)
        return np.asarray(idx, dtype=np.intp), np.sqrt(np.asarray(sq_dists, dtype=np.float64))

    def knn(self, query_points, k):
        query_points = np.asarray(query_points, dtype=np.float64)
        indices = np.empty((len(query_points), k), dtype=np.intp)
        distances = np.empty((len(query_points), k), dtype=np.float64)
        for i, q in enumerate(query_points):
            indices[i], distances[i] = self.neighbors(q, k)
        return indices, distances
