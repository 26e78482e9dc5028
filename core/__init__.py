"""
核心模块
PLY头部解析、二进制解码与点云构建
"""

__version__ = "1.0.0"

from .exceptions import (
    PlyLoadError,
    MalformedHeaderError,
    UnsupportedFormatError,
    TruncatedBodyError,
    UnsupportedPropertyTypeError,
)
from .point_types import PointXYZW, ScalarType, PropertyDescriptor, PlyElement, PlyHeader
from .ply_header import PlyHeaderParser
from .ply_body import PlyBodyDecoder
from .point_cloud import PointCloud
from .point_cloud_builder import PointCloudBuilder
from .ply_loader import PointCloudLoader, PlyLoader

__all__ = [
    'PlyLoadError',
    'MalformedHeaderError',
    'UnsupportedFormatError',
    'TruncatedBodyError',
    'UnsupportedPropertyTypeError',
    'PointXYZW',
    'ScalarType',
    'PropertyDescriptor',
    'PlyElement',
    'PlyHeader',
    'PlyHeaderParser',
    'PlyBodyDecoder',
    'PointCloud',
    'PointCloudBuilder',
    'PointCloudLoader',
    'PlyLoader',
]


def get_version_info():
    """获取版本信息"""
    return {
        'version': __version__,
        'format': 'PLY (binary little/big endian)',
        'platform': 'Linux/Windows/macOS',
    }
