"""
系统配置文件 - PLY点云加载器
PLY Point Cloud Loader Configuration
"""

import logging


class Config:
    """系统配置类"""

    # ==================== 文件格式 ====================
    # 只接受该后缀的文件（区分大小写）
    PLY_EXTENSION = '.ply'

    # 头部结束标记
    HEADER_END = 'end_header'

    # 头部未声明format时使用的格式
    DEFAULT_FORMAT = 'binary_little_endian'

    # 可以解码的二进制格式及其字节序
    BINARY_FORMATS = {
        'binary_little_endian': '<',
        'binary_big_endian': '>',
    }

    # ==================== 属性映射 ====================
    # float属性 -> 位置分量索引
    POSITION_FIELDS = {'x': 0, 'y': 1, 'z': 2}

    # uchar属性 -> 颜色通道索引
    COLOR_FIELDS = {'red': 0, 'green': 1, 'blue': 2, 'alpha': 3}

    # 位置齐次坐标默认值
    DEFAULT_W = 1.0

    # 颜色归一化：大于阈值的通道值除以COLOR_SCALE
    COLOR_SCALE = 255.0
    COLOR_NORMALIZED_MAX = 1

    # ==================== 系统配置 ====================
    # 日志
    LOG_LEVEL = logging.INFO
    LOG_FILE = None
    LOGGER_NAMESPACE = 'ply_loader'

    # 输出目录
    OUTPUT_DIR = 'output'

    @classmethod
    def to_dict(cls):
        """将配置导出为字典"""
        config_dict = {}
        for key in dir(cls):
            if not key.startswith('_') and key.isupper():
                value = getattr(cls, key)
                if isinstance(value, dict):
                    config_dict[key] = dict(value)
                else:
                    config_dict[key] = value
        return config_dict

    @classmethod
    def print_config(cls):
        """打印当前配置"""
        print("\n" + "=" * 60)
        print("系统配置 - PLY点云加载器")
        print("=" * 60)

        print(f"\n文件格式:")
        print(f"  后缀: {cls.PLY_EXTENSION}")
        print(f"  头部结束标记: {cls.HEADER_END}")
        print(f"  默认格式: {cls.DEFAULT_FORMAT}")
        print(f"  支持格式: {', '.join(cls.BINARY_FORMATS)}")

        print(f"\n属性映射:")
        print(f"  位置: {', '.join(cls.POSITION_FIELDS)}")
        print(f"  颜色: {', '.join(cls.COLOR_FIELDS)}")
        print(f"  颜色缩放: 1/{cls.COLOR_SCALE:g} (值 > {cls.COLOR_NORMALIZED_MAX})")

        print(f"\n日志:")
        print(f"  级别: {logging.getLevelName(cls.LOG_LEVEL)}")
        print(f"  文件: {cls.LOG_FILE or '无'}")

        print("=" * 60 + "\n")


if __name__ == "__main__":
    # 测试配置
    Config.print_config()
