"""
点云基础数据类型
PointXYZW、属性描述符与PLY头部结构
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional

import numpy as np


class PointXYZW(NamedTuple):
    """
    四分量点 (x, y, z, w)

    同时用于位置（w默认为1）和RGBA颜色（x,y,z,w 依次对应 r,g,b,a）
    """
    x: float
    y: float
    z: float
    w: float


class ScalarType(Enum):
    """PLY属性的标量类型，值为numpy类型码"""

    INT8 = 'i1'
    UINT8 = 'u1'
    INT16 = 'i2'
    UINT16 = 'u2'
    INT32 = 'i4'
    UINT32 = 'u4'
    FLOAT32 = 'f4'
    FLOAT64 = 'f8'
    LIST = 'list'
    UNKNOWN = 'unknown'

    @property
    def is_fixed_width(self) -> bool:
        return self not in (ScalarType.LIST, ScalarType.UNKNOWN)

    @property
    def itemsize(self) -> int:
        """单个值的字节宽度（变长或未知类型为0）"""
        if not self.is_fixed_width:
            return 0
        return np.dtype(self.value).itemsize

    def dtype(self, byte_order: str = '<') -> np.dtype:
        """
        获取带字节序的numpy类型

        Args:
            byte_order: '<' 小端, '>' 大端
        """
        if not self.is_fixed_width:
            raise ValueError(f"{self.name} 没有固定宽度")
        return np.dtype(byte_order + self.value)

    @classmethod
    def from_ply_name(cls, type_name: str) -> 'ScalarType':
        """PLY类型名 -> ScalarType，未识别的返回UNKNOWN"""
        return _PLY_TYPE_NAMES.get(type_name, cls.UNKNOWN)


# PLY规范中的类型名及其常见别名
_PLY_TYPE_NAMES = {
    'char': ScalarType.INT8,
    'int8': ScalarType.INT8,
    'uchar': ScalarType.UINT8,
    'uint8': ScalarType.UINT8,
    'short': ScalarType.INT16,
    'int16': ScalarType.INT16,
    'ushort': ScalarType.UINT16,
    'uint16': ScalarType.UINT16,
    'int': ScalarType.INT32,
    'int32': ScalarType.INT32,
    'uint': ScalarType.UINT32,
    'uint32': ScalarType.UINT32,
    'float': ScalarType.FLOAT32,
    'float32': ScalarType.FLOAT32,
    'double': ScalarType.FLOAT64,
    'float64': ScalarType.FLOAT64,
}


@dataclass(frozen=True)
class PropertyDescriptor:
    """头部声明的属性 (名称, 标量类型)，顺序即解码顺序"""
    name: str
    scalar_type: ScalarType
    type_name: str = ''


@dataclass
class PlyElement:
    """头部声明的元素（vertex、face等）及其属性"""
    name: str
    count: int
    properties: List[PropertyDescriptor] = field(default_factory=list)

    @property
    def is_fixed_width(self) -> bool:
        return all(prop.scalar_type.is_fixed_width for prop in self.properties)

    @property
    def record_size(self) -> int:
        """单条记录的字节数"""
        return sum(prop.scalar_type.itemsize for prop in self.properties)


@dataclass
class PlyHeader:
    """
    解析后的PLY头部

    Attributes:
        format: 数据格式 (binary_little_endian / binary_big_endian / ascii)
        version: 格式版本号
        elements: 按声明顺序排列的元素
        payload_offset: 二进制数据起始字节偏移
    """
    format: str
    version: str
    elements: List[PlyElement]
    payload_offset: int

    def get_element(self, name: str) -> Optional[PlyElement]:
        for element in self.elements:
            if element.name == name:
                return element
        return None

    @property
    def vertex_count(self) -> int:
        vertex = self.get_element('vertex')
        return vertex.count if vertex is not None else 0

    @property
    def face_count(self) -> int:
        face = self.get_element('face')
        return face.count if face is not None else 0

    @property
    def properties(self) -> List[PropertyDescriptor]:
        """顶点元素的属性列表"""
        vertex = self.get_element('vertex')
        return list(vertex.properties) if vertex is not None else []
