"""
工具模块
包含点云保存、统计和日志配置等辅助功能
"""

from .point_cloud import PointCloudProcessor
from .logging_config import setup_logging

__all__ = [
    'PointCloudProcessor',
    'setup_logging',
]
