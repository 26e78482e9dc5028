"""
PLY头部解析模块
逐行读取文本头部，记录元素计数、属性声明以及二进制数据的起始偏移
"""

from typing import BinaryIO, List, Optional

from config import Config
from .exceptions import MalformedHeaderError
from .point_types import PlyElement, PlyHeader, PropertyDescriptor, ScalarType


class PlyHeaderParser:
    """PLY头部解析器"""

    def __init__(self, header_end: str = Config.HEADER_END,
                 default_format: str = Config.DEFAULT_FORMAT):
        """
        初始化头部解析器

        Args:
            header_end: 头部结束行
            default_format: 头部未声明format时使用的格式
        """
        self.header_end = header_end
        self.default_format = default_format

    def parse(self, stream: BinaryIO) -> PlyHeader:
        """
        解析头部

        流必须以二进制模式打开并位于文件开头。返回时流恰好位于
        end_header 行（含换行符）之后，即二进制数据的第一个字节。

        Args:
            stream: 二进制文件流

        Returns:
            PlyHeader
        """
        fmt = self.default_format
        version = '1.0'
        elements: List[PlyElement] = []
        current: Optional[PlyElement] = None
        line_number = 0

        while True:
            raw = stream.readline()
            if not raw:
                raise MalformedHeaderError(
                    f"文件在 '{self.header_end}' 之前结束 (共 {line_number} 行)"
                )
            line_number += 1

            try:
                line = raw.decode('ascii')
            except UnicodeDecodeError:
                raise MalformedHeaderError(f"第 {line_number} 行包含非ASCII字符")

            line = line.rstrip('\r\n')
            if line == self.header_end:
                break
            if not line:
                continue

            tokens = line.split()
            if not tokens:
                continue
            keyword = tokens[0]

            if keyword == 'format':
                self._require(tokens, 2, line_number, line)
                fmt = tokens[1]
                if len(tokens) > 2:
                    version = tokens[2]

            elif keyword == 'element':
                self._require(tokens, 3, line_number, line)
                current = PlyElement(tokens[1], self._parse_count(tokens[2], line_number))
                elements.append(current)

            elif keyword == 'property':
                if current is None:
                    raise MalformedHeaderError(
                        f"第 {line_number} 行: 属性声明出现在任何element之前"
                    )
                current.properties.append(self._parse_property(tokens, line_number, line))

            # ply / comment / obj_info 以及其他行忽略

        return PlyHeader(
            format=fmt,
            version=version,
            elements=elements,
            payload_offset=stream.tell(),
        )

    def _parse_property(self, tokens: List[str], line_number: int, line: str) -> PropertyDescriptor:
        """解析 property 行"""
        self._require(tokens, 3, line_number, line)

        if tokens[1] == 'list':
            # property list <count_type> <item_type> <name>
            self._require(tokens, 5, line_number, line)
            type_name = f"list {tokens[2]} {tokens[3]}"
            return PropertyDescriptor(tokens[4], ScalarType.LIST, type_name)

        return PropertyDescriptor(tokens[2], ScalarType.from_ply_name(tokens[1]), tokens[1])

    @staticmethod
    def _parse_count(token: str, line_number: int) -> int:
        # 只接受十进制数字，不接受 +3、1_000、-1 等写法
        if not (token.isascii() and token.isdigit()):
            raise MalformedHeaderError(f"第 {line_number} 行: 元素计数不是非负整数: '{token}'")
        return int(token)

    @staticmethod
    def _require(tokens: List[str], count: int, line_number: int, line: str):
        if len(tokens) < count:
            raise MalformedHeaderError(f"第 {line_number} 行字段不足: '{line}'")
