"""
PLY点云加载器
文件路径 -> PointCloud，支持在后台线程中异步加载
"""

import asyncio
import logging
import os
from concurrent.futures import Executor
from typing import Optional, Union

from config import Config
from .ply_body import PlyBodyDecoder
from .ply_header import PlyHeaderParser
from .point_cloud import PointCloud
from .point_cloud_builder import PointCloudBuilder

PathLike = Union[str, 'os.PathLike[str]']


class PointCloudLoader:
    """
    点云加载器基类

    子类实现 load()；load_file() 把一次完整加载放到执行器中运行，
    调用方只需 await 一次。
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 executor: Optional[Executor] = None):
        """
        Args:
            logger: 诊断日志输出（默认使用模块logger）
            executor: 后台执行器（默认使用事件循环的默认线程池）
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.executor = executor

    def load(self, file_path: PathLike) -> PointCloud:
        return PointCloud.empty()

    async def load_file(self, file_path: PathLike) -> PointCloud:
        """在后台执行 load()，完成后返回结果"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self.load, file_path)


class PlyLoader(PointCloudLoader):
    """二进制PLY加载器"""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 executor: Optional[Executor] = None,
                 header_parser: Optional[PlyHeaderParser] = None,
                 body_decoder: Optional[PlyBodyDecoder] = None,
                 builder: Optional[PointCloudBuilder] = None):
        super().__init__(logger, executor)
        self.header_parser = header_parser or PlyHeaderParser()
        self.body_decoder = body_decoder or PlyBodyDecoder()
        self.builder = builder or PointCloudBuilder()

    def load(self, file_path: PathLike) -> PointCloud:
        """
        同步加载PLY文件

        后缀不是 .ply 时记录错误并返回空点云；其他解析失败记录后重新抛出。

        Args:
            file_path: 文件路径

        Returns:
            PointCloud
        """
        path = os.fspath(file_path)
        self.logger.info("[PlyLoader] 开始加载点云: %s", path)

        if not path.endswith(Config.PLY_EXTENSION):
            self.logger.error("[PlyLoader] 文件类型无效，需要 %s: %s", Config.PLY_EXTENSION, path)
            return PointCloud.empty()

        try:
            with open(path, 'rb') as f:
                header = self.header_parser.parse(f)
                self.logger.debug(
                    "[PlyLoader] 头部: 格式=%s 顶点=%d 面=%d 属性=%s 数据偏移=%d",
                    header.format, header.vertex_count, header.face_count,
                    [prop.name for prop in header.properties], header.payload_offset
                )
                raw_positions, raw_colors = self.body_decoder.decode(f, header)
        except Exception as e:
            self.logger.error("[PlyLoader] 加载失败 %s: %s", path, e)
            raise

        point_cloud = self.builder.build(raw_positions, raw_colors)
        self.logger.info("[PlyLoader] 点云加载完成: %d 个点", point_cloud.vertex_count)
        return point_cloud
