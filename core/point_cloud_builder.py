"""
点云构建模块
对解码结果做原点平移和颜色归一化，生成最终点云
"""

import numpy as np

from config import Config
from .point_cloud import PointCloud


class PointCloudBuilder:
    """点云构建器"""

    def __init__(self, color_scale: float = Config.COLOR_SCALE,
                 color_normalized_max: int = Config.COLOR_NORMALIZED_MAX):
        """
        初始化构建器

        Args:
            color_scale: 0-255范围颜色的除数
            color_normalized_max: 不大于该值的通道视为已归一化
        """
        self.color_scale = np.float32(color_scale)
        self.color_normalized_max = color_normalized_max

    def build(self, raw_positions: np.ndarray, raw_colors: np.ndarray) -> PointCloud:
        """
        构建点云

        Args:
            raw_positions: (N x 4) float32 原始位置
            raw_colors: (N x 4) uint8 原始颜色

        Returns:
            PointCloud
        """
        if len(raw_positions) == 0:
            return PointCloud.empty()

        positions = self.center_positions(raw_positions)
        colors = self.normalize_colors(raw_colors)
        return PointCloud(positions, colors)

    @staticmethod
    def center_positions(raw_positions: np.ndarray) -> np.ndarray:
        """
        以第一个顶点为原点

        只平移 x, y, z，w 保持不变。第一个顶点结果恰好为 (0, 0, 0, w)。
        """
        positions = np.array(raw_positions, dtype=np.float32)
        if len(positions) == 0:
            return positions

        offset = positions[0, :3].copy()
        positions[:, :3] -= offset
        return positions

    def normalize_colors(self, raw_colors: np.ndarray) -> np.ndarray:
        """
        颜色通道归一化

        通道值大于1时按0-255范围除以255，否则原样保留（视为已归一化的0/1）。
        注意：值为1的通道无法区分两种情况，这里保持原样。
        """
        values = np.asarray(raw_colors).astype(np.float32)
        return np.where(values > self.color_normalized_max,
                        values / self.color_scale,
                        values).astype(np.float32)
