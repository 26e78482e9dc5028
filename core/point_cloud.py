"""
点云数据容器
加载完成后不可修改
"""

from typing import Iterator, Tuple

import numpy as np

from .point_types import PointXYZW


class PointCloud:
    """
    不可变点云

    Attributes:
        positions: (N x 4) float32 位置 (x, y, z, w)
        colors: (N x 4) float32 颜色 (r, g, b, a)
        vertex_count: 顶点数 N
    """

    def __init__(self, positions: np.ndarray, colors: np.ndarray):
        positions = self._as_xyzw(positions, '位置')
        colors = self._as_xyzw(colors, '颜色')

        if len(positions) != len(colors):
            raise ValueError(
                f"位置与颜色数量不一致: {len(positions)} != {len(colors)}"
            )

        positions.setflags(write=False)
        colors.setflags(write=False)

        self._positions = positions
        self._colors = colors
        self._vertex_count = len(positions)

    @staticmethod
    def _as_xyzw(values, label: str) -> np.ndarray:
        """复制为 (N x 4) float32，空输入视为0个点"""
        array = np.array(values, dtype=np.float32)
        if array.size == 0:
            return array.reshape(0, 4)
        if array.ndim != 2 or array.shape[1] != 4:
            raise ValueError(f"{label}形状应为 (N x 4): {array.shape}")
        return array

    @classmethod
    def empty(cls) -> 'PointCloud':
        """空点云"""
        return cls(np.zeros((0, 4), dtype=np.float32), np.zeros((0, 4), dtype=np.float32))

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def colors(self) -> np.ndarray:
        return self._colors

    def __len__(self) -> int:
        return self._vertex_count

    def iter_points(self) -> Iterator[Tuple[PointXYZW, PointXYZW]]:
        """按顶点顺序逐个返回 (位置, 颜色)"""
        for position, color in zip(self._positions, self._colors):
            yield PointXYZW(*position.tolist()), PointXYZW(*color.tolist())

    def __repr__(self):
        return f"PointCloud(vertex_count={self._vertex_count})"
