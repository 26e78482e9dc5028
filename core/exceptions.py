"""
PLY加载异常定义
PLY loading errors
"""


class PlyLoadError(Exception):
    """PLY文件解析失败的基类"""


class MalformedHeaderError(PlyLoadError):
    """头部格式错误：缺少end_header、计数非法、字段缺失等"""


class UnsupportedFormatError(PlyLoadError):
    """不支持的数据格式（例如 ascii）"""


class TruncatedBodyError(PlyLoadError):
    """二进制数据长度不足以容纳声明的顶点数"""

    def __init__(self, expected_bytes: int, actual_bytes: int):
        self.expected_bytes = expected_bytes
        self.actual_bytes = actual_bytes
        super().__init__(
            f"顶点数据被截断: 需要 {expected_bytes} 字节, 实际 {actual_bytes} 字节"
        )


class UnsupportedPropertyTypeError(PlyLoadError):
    """顶点元素中出现无法确定字节宽度的属性类型"""

    def __init__(self, property_name: str, type_name: str):
        self.property_name = property_name
        self.type_name = type_name
        super().__init__(
            f"不支持的属性类型: '{type_name}' (属性 '{property_name}')"
        )
