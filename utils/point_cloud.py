"""
点云处理工具模块
包含PLY保存、统计信息和可视化功能
"""

import logging
import os
from typing import Optional

import numpy as np

from core.point_cloud import PointCloud

logger = logging.getLogger(__name__)


class PointCloudProcessor:
    """点云处理器"""

    def __init__(self):
        self.o3d = None

    def save_ply(self, points: np.ndarray, filename: str, colors: Optional[np.ndarray] = None,
                 byte_order: str = '<') -> str:
        """
        保存点云为二进制PLY格式

        Args:
            points: 点云数据 (N x 3) 或 (N x 4)，只写入 x, y, z
            filename: 保存文件名
            colors: 颜色数据 (N x 3) 或 (N x 4)，0-255，可选
            byte_order: '<' 小端, '>' 大端

        Returns:
            实际写入的文件名
        """
        points = np.asarray(points, dtype=np.float32)
        if points.ndim != 2 or points.shape[1] < 3:
            raise ValueError(f"点云形状应为 (N x 3): {points.shape}")

        if colors is not None:
            colors = np.asarray(colors)
            if len(colors) != len(points):
                raise ValueError(f"颜色数量与点数不一致: {len(colors)} != {len(points)}")

        # 确保文件名以.ply结尾
        if not filename.endswith('.ply'):
            filename += '.ply'

        # 创建保存目录
        os.makedirs(os.path.dirname(filename) if os.path.dirname(filename) else '.', exist_ok=True)

        fields = [('x', 'f4'), ('y', 'f4'), ('z', 'f4')]
        channels = []
        if colors is not None:
            channels = ['red', 'green', 'blue', 'alpha'][:colors.shape[1]]
            fields += [(name, 'u1') for name in channels]

        fmt = 'binary_little_endian' if byte_order == '<' else 'binary_big_endian'
        dtype = np.dtype([(name, byte_order + code) for name, code in fields])
        records = np.zeros(len(points), dtype=dtype)
        records['x'] = points[:, 0]
        records['y'] = points[:, 1]
        records['z'] = points[:, 2]
        for i, name in enumerate(channels):
            records[name] = np.clip(colors[:, i], 0, 255).astype(np.uint8)

        header = [
            "ply",
            f"format {fmt} 1.0",
            f"element vertex {len(points)}",
        ]
        header += [f"property {'float' if code == 'f4' else 'uchar'} {name}" for name, code in fields]
        header.append("end_header")

        with open(filename, 'wb') as f:
            f.write(("\n".join(header) + "\n").encode('ascii'))
            f.write(records.tobytes())

        logger.info("点云已保存到: %s (%d 点)", filename, len(points))
        return filename

    def compute_point_cloud_metrics(self, point_cloud: PointCloud) -> dict:
        """
        计算加载后点云的统计信息

        位置已以第一个顶点为原点，因此 'max_distance' 即离首点最远的距离。
        颜色统计在归一化后的 (r, g, b, a) 上计算。

        Args:
            point_cloud: 加载得到的点云

        Returns:
            统计信息字典
        """
        if point_cloud.vertex_count == 0:
            return {
                'num_points': 0,
                'bbox': None,
                'dimensions': None,
                'color_mean': None,
            }

        xyz = point_cloud.positions[:, :3].astype(np.float64)
        colors = point_cloud.colors
        min_bound = xyz.min(axis=0)
        max_bound = xyz.max(axis=0)

        metrics = {
            'num_points': point_cloud.vertex_count,
            'bbox': (min_bound, max_bound),
            'bbox_center': (min_bound + max_bound) / 2.0,
            'dimensions': max_bound - min_bound,
            'max_distance': float(np.linalg.norm(xyz, axis=1).max()),
            'color_mean': colors.mean(axis=0),
            'has_color': bool(np.any(colors[:, :3])),
            'has_alpha': bool(np.any(colors[:, 3])),
        }

        # 平均点距（最近邻）
        if len(xyz) > 1:
            from scipy.spatial import cKDTree
            distances, _ = cKDTree(xyz).query(xyz, k=2)
            metrics['avg_point_spacing'] = float(np.mean(distances[:, 1]))

        return metrics

    def _open3d(self):
        """按需导入Open3D（可选依赖 visualization）"""
        if self.o3d is None:
            try:
                import open3d
            except ImportError:
                logger.error("需要Open3D进行可视化 (pip install open3d)")
                return None
            self.o3d = open3d
        return self.o3d

    def visualize(self, point_cloud: PointCloud, window_name: str = "3D Point Cloud") -> bool:
        """
        可视化点云，颜色只使用 r, g, b

        Returns:
            是否成功显示
        """
        if point_cloud.vertex_count == 0:
            logger.warning("空点云，无法可视化")
            return False

        o3d = self._open3d()
        if o3d is None:
            return False

        pcd = o3d.geometry.PointCloud()
        pcd.points = o3d.utility.Vector3dVector(point_cloud.positions[:, :3].astype(np.float64))
        pcd.colors = o3d.utility.Vector3dVector(point_cloud.colors[:, :3].astype(np.float64))

        # 首个顶点位于原点，在原点放置坐标系
        coord_frame = o3d.geometry.TriangleMesh.create_coordinate_frame(
            size=0.1, origin=[0, 0, 0]
        )

        o3d.visualization.draw_geometries(
            [pcd, coord_frame],
            window_name=window_name,
            width=1280,
            height=720
        )
        return True
