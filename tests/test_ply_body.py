import io
import struct

import numpy as np
import pytest

from core.exceptions import TruncatedBodyError, UnsupportedFormatError, UnsupportedPropertyTypeError
from core.ply_body import PlyBodyDecoder
from core.ply_header import PlyHeaderParser


def decode(header_text, body):
    stream = io.BytesIO(header_text.encode("ascii") + body)
    header = PlyHeaderParser().parse(stream)
    return PlyBodyDecoder().decode(stream, header)


def test_routes_known_properties_and_skips_others():
    header = (
        "element vertex 2\n"
        "property float x\n"
        "property float intensity\n"
        "property float y\n"
        "property uchar flags\n"
        "property float z\n"
        "property uchar alpha\n"
        "property uchar red\n"
        "end_header\n"
    )
    body = (
        struct.pack("<fffBfBB", 1.5, 99.0, 2.5, 7, 3.5, 200, 10)
        + struct.pack("<fffBfBB", -1.0, 42.0, -2.0, 8, -3.0, 0, 1)
    )

    positions, colors = decode(header, body)

    np.testing.assert_array_equal(positions, [[1.5, 2.5, 3.5, 1.0], [-1.0, -2.0, -3.0, 1.0]])
    np.testing.assert_array_equal(colors, [[10, 0, 0, 200], [1, 0, 0, 0]])
    assert positions.dtype == np.float32
    assert colors.dtype == np.uint8


def test_defaults_without_color_properties():
    positions, colors = decode(
        "element vertex 1\nproperty float x\nproperty float y\nproperty float z\nend_header\n",
        struct.pack("<fff", 4.0, 5.0, 6.0),
    )

    np.testing.assert_array_equal(positions, [[4.0, 5.0, 6.0, 1.0]])
    np.testing.assert_array_equal(colors, [[0, 0, 0, 0]])


def test_type_must_match_for_routing():
    # x 声明为 double、red 声明为 float 时只按宽度跳过
    positions, colors = decode(
        "element vertex 1\nproperty double x\nproperty float red\nproperty float y\nend_header\n",
        struct.pack("<dff", 9.0, 200.0, 2.0),
    )

    np.testing.assert_array_equal(positions, [[0.0, 2.0, 0.0, 1.0]])
    np.testing.assert_array_equal(colors, [[0, 0, 0, 0]])


def test_extended_widths_keep_alignment():
    header = (
        "element vertex 2\n"
        "property char a\n"
        "property short b\n"
        "property ushort c\n"
        "property int d\n"
        "property uint e\n"
        "property double f\n"
        "property float x\n"
        "property uchar green\n"
        "end_header\n"
    )
    record = "<bhHiIdfB"
    body = struct.pack(record, -1, -2, 3, -4, 5, 6.0, 7.25, 77) + struct.pack(record, 0, 0, 0, 0, 0, 0.0, 8.5, 88)

    positions, colors = decode(header, body)

    np.testing.assert_array_equal(positions[:, 0], [7.25, 8.5])
    np.testing.assert_array_equal(colors[:, 1], [77, 88])


def test_big_endian():
    positions, colors = decode(
        "format binary_big_endian 1.0\nelement vertex 1\nproperty float x\nproperty uchar blue\nend_header\n",
        struct.pack(">fB", 3.25, 9),
    )

    assert positions[0, 0] == pytest.approx(3.25)
    assert colors[0, 2] == 9


def test_skips_elements_before_vertex():
    positions, _ = decode(
        "element camera 2\nproperty float fov\nelement vertex 1\nproperty float x\nend_header\n",
        struct.pack("<ff", 60.0, 90.0) + struct.pack("<f", 5.0),
    )

    assert positions[0, 0] == 5.0


def test_trailing_face_data_is_ignored():
    positions, _ = decode(
        "element vertex 1\nproperty float z\nelement face 1\nproperty list uchar int vertex_indices\nend_header\n",
        struct.pack("<f", 2.0) + struct.pack("<Biii", 3, 0, 0, 0),
    )

    np.testing.assert_array_equal(positions, [[0.0, 0.0, 2.0, 1.0]])


def test_truncated_body():
    with pytest.raises(TruncatedBodyError) as excinfo:
        decode(
            "element vertex 3\nproperty float x\nproperty uchar red\nend_header\n",
            struct.pack("<fB", 1.0, 2) * 2,
        )

    assert excinfo.value.expected_bytes == 15
    assert excinfo.value.actual_bytes == 10


def test_unknown_type_is_rejected():
    with pytest.raises(UnsupportedPropertyTypeError) as excinfo:
        decode(
            "element vertex 1\nproperty half h\nproperty float x\nend_header\n",
            b"\x00" * 16,
        )

    assert excinfo.value.property_name == "h"
    assert excinfo.value.type_name == "half"


def test_list_in_vertex_is_rejected():
    with pytest.raises(UnsupportedPropertyTypeError):
        decode("element vertex 1\nproperty list uchar int idx\nend_header\n", b"\x00" * 16)


def test_ascii_format_is_rejected():
    with pytest.raises(UnsupportedFormatError):
        decode("format ascii 1.0\nelement vertex 1\nproperty float x\nend_header\n", b"1.0\n")


def test_zero_vertices_reads_nothing():
    positions, colors = decode("element vertex 0\nproperty float x\nend_header\n", b"")

    assert positions.shape == (0, 4)
    assert colors.shape == (0, 4)


def test_huge_vertex_count_fails_before_allocating():
    with pytest.raises(TruncatedBodyError) as excinfo:
        decode(
            "element vertex 100000000000\nproperty float x\nend_header\n",
            struct.pack("<f", 1.0),
        )

    assert excinfo.value.expected_bytes == 400000000000
    assert excinfo.value.actual_bytes == 4


def test_truncated_leading_element():
    with pytest.raises(TruncatedBodyError) as excinfo:
        decode(
            "element camera 4\nproperty double fov\nelement vertex 1\nproperty float x\nend_header\n",
            struct.pack("<d", 60.0),
        )

    assert excinfo.value.actual_bytes == 0
