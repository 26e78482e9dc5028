import struct
import sys
from pathlib import Path

import pytest

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent))


XYZ_RGB_HEADER = [
    "ply",
    "format binary_little_endian 1.0",
    "element vertex {count}",
    "property float x",
    "property float y",
    "property float z",
    "property uchar red",
    "property uchar green",
    "property uchar blue",
    "end_header",
]


def pack_xyz_rgb(vertices):
    """[(x, y, z, r, g, b), ...] -> 小端二进制记录"""
    return b"".join(struct.pack("<fffBBB", *vertex) for vertex in vertices)


@pytest.fixture
def write_ply(tmp_path):
    """写入由头部行和二进制数据组成的文件，返回路径"""

    def _write(header_lines, body=b"", name="cloud.ply", newline="\n"):
        path = tmp_path / name
        header = newline.join(header_lines) + newline
        path.write_bytes(header.encode("ascii") + body)
        return path

    return _write


@pytest.fixture
def two_vertex_ply(write_ply):
    header = [line.format(count=2) for line in XYZ_RGB_HEADER]
    body = pack_xyz_rgb([
        (0.0, 0.0, 0.0, 10, 0, 0),
        (1.0, 2.0, 3.0, 255, 128, 64),
    ])
    return write_ply(header, body)
