"""
日志配置
为项目的logger命名空间设置控制台和文件输出
"""

import logging
import sys
from typing import Iterable, Optional

from config import Config

# 项目内使用logging.getLogger(__name__)的顶层包
PACKAGE_LOGGERS = ('core', 'utils')


def setup_logging(level: int = Config.LOG_LEVEL, log_file: Optional[str] = Config.LOG_FILE,
                  names: Iterable[str] = PACKAGE_LOGGERS) -> logging.Logger:
    """
    配置日志输出

    Args:
        level: 日志级别 (logging.DEBUG, logging.INFO, ...)
        log_file: 可选的日志文件路径

    Returns:
        Config.LOGGER_NAMESPACE 对应的logger，可直接传给 PlyLoader
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in (Config.LOGGER_NAMESPACE,) + tuple(names):
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # 避免重复配置时日志重复输出
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    return logging.getLogger(Config.LOGGER_NAMESPACE)
