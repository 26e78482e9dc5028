"""
PLY二进制数据解码模块
按头部声明的属性顺序逐条解码顶点记录
"""

from typing import BinaryIO, Tuple

import numpy as np

from config import Config
from .exceptions import TruncatedBodyError, UnsupportedFormatError, UnsupportedPropertyTypeError
from .point_types import PlyElement, PlyHeader, ScalarType


class PlyBodyDecoder:
    """
    顶点数据解码器

    每条记录的布局完全由属性声明顺序和字节宽度决定：
    float 类型的 x/y/z 写入位置，uchar 类型的 red/green/blue/alpha 写入颜色，
    其余属性按宽度读取后丢弃。
    """

    def __init__(self, position_fields=None, color_fields=None, default_w: float = Config.DEFAULT_W):
        """
        初始化解码器

        Args:
            position_fields: 属性名 -> 位置分量索引
            color_fields: 属性名 -> 颜色通道索引
            default_w: 位置w分量默认值
        """
        self.position_fields = position_fields if position_fields is not None else Config.POSITION_FIELDS
        self.color_fields = color_fields if color_fields is not None else Config.COLOR_FIELDS
        self.default_w = default_w

    def decode(self, stream: BinaryIO, header: PlyHeader) -> Tuple[np.ndarray, np.ndarray]:
        """
        解码全部顶点

        Args:
            stream: 二进制文件流
            header: 已解析的头部

        Returns:
            (positions, colors): (N x 4) float32 原始位置, (N x 4) uint8 原始颜色
        """
        vertex = header.get_element('vertex')
        vertex_count = header.vertex_count

        if vertex is None or vertex_count == 0:
            return self._allocate(0)

        byte_order = self._byte_order(header.format)
        record_dtype = self.record_dtype(vertex, byte_order)
        if record_dtype.itemsize == 0:
            # 没有属性的记录不占字节
            return self._allocate(vertex_count)

        # 跳过vertex之前的元素
        start = header.payload_offset + self._leading_bytes(header)
        expected = vertex_count * record_dtype.itemsize

        # 先确认数据完整，再读取和分配缓冲区
        available = self._available_bytes(stream, start)
        if available < expected:
            raise TruncatedBodyError(expected, available)

        stream.seek(start)
        data = stream.read(expected)
        if len(data) < expected:
            raise TruncatedBodyError(expected, len(data))

        records = np.frombuffer(data, dtype=record_dtype, count=vertex_count)
        positions, colors = self._allocate(vertex_count)

        for index, prop in enumerate(vertex.properties):
            column = records[f"f{index}"]
            if prop.scalar_type == ScalarType.FLOAT32 and prop.name in self.position_fields:
                positions[:, self.position_fields[prop.name]] = column
            elif prop.scalar_type == ScalarType.UINT8 and prop.name in self.color_fields:
                colors[:, self.color_fields[prop.name]] = column

        return positions, colors

    def _allocate(self, vertex_count: int) -> Tuple[np.ndarray, np.ndarray]:
        """按默认值初始化位置 (0, 0, 0, w) 和颜色 (0, 0, 0, 0)"""
        positions = np.zeros((vertex_count, 4), dtype=np.float32)
        positions[:, 3] = self.default_w
        colors = np.zeros((vertex_count, 4), dtype=np.uint8)
        return positions, colors

    @staticmethod
    def _available_bytes(stream: BinaryIO, start: int) -> int:
        """从start到文件末尾的字节数"""
        end = stream.seek(0, 2)
        return max(0, end - start)

    @staticmethod
    def record_dtype(element: PlyElement, byte_order: str = '<') -> np.dtype:
        """
        根据属性声明构建紧凑的结构化dtype

        字段按位置命名（f0, f1, ...），属性名可以重复。
        """
        for prop in element.properties:
            if not prop.scalar_type.is_fixed_width:
                raise UnsupportedPropertyTypeError(prop.name, prop.type_name or prop.scalar_type.name)

        return np.dtype({
            'names': [f"f{index}" for index in range(len(element.properties))],
            'formats': [prop.scalar_type.dtype(byte_order) for prop in element.properties],
        })

    @staticmethod
    def _byte_order(fmt: str) -> str:
        if fmt not in Config.BINARY_FORMATS:
            raise UnsupportedFormatError(f"不支持的PLY数据格式: '{fmt}'")
        return Config.BINARY_FORMATS[fmt]

    @staticmethod
    def _leading_bytes(header: PlyHeader) -> int:
        """vertex元素之前的元素所占字节数"""
        skipped = 0
        for element in header.elements:
            if element.name == 'vertex':
                break
            if element.count == 0:
                continue
            if not element.is_fixed_width:
                prop = next(p for p in element.properties if not p.scalar_type.is_fixed_width)
                raise UnsupportedPropertyTypeError(prop.name, prop.type_name or prop.scalar_type.name)
            skipped += element.count * element.record_size
        return skipped
