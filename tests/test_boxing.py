"""
Tests for scalar classification helpers and primitive array boxing.
"""

import ctypes
from array import array

import pytest

from objectvisitor import ScalarKind
from objectvisitor.core.boxing import box_array, is_primitive_array, scalar_kind_of, unbox


class TestScalarKindOf:

    @pytest.mark.parametrize("value", [[1], {"a": 1}, object(), b"x", None])
    def test_not_scalar(self, value):
        assert scalar_kind_of(value) is None

    def test_unsigned_widening(self):
        assert scalar_kind_of(ctypes.c_uint16(1)) is ScalarKind.INT32
        assert scalar_kind_of(ctypes.c_uint32(1)) is ScalarKind.INT64
        assert scalar_kind_of(ctypes.c_uint64(1)) is ScalarKind.INT64

    def test_visit_method(self):
        assert ScalarKind.FLOAT32.visit_method == "visit_float32"
        assert ScalarKind.CHARACTER.visit_method == "visit_char"


class TestBoxing:

    @pytest.mark.parametrize("value", [array('b'), b"", bytearray(b"ab")])
    def test_is_primitive_array(self, value):
        assert is_primitive_array(value)

    @pytest.mark.parametrize("value", [[1], (1,), "ab", range(2)])
    def test_is_not_primitive_array(self, value):
        assert not is_primitive_array(value)

    def test_box_keeps_order_and_width(self):
        boxed = box_array(array('h', [3, -1, 7]))
        assert [type(item) for item in boxed] == [ctypes.c_short] * 3
        assert [unbox(item) for item in boxed] == [3, -1, 7]

    def test_box_bytearray(self):
        boxed = box_array(bytearray(b"\x00\x80"))
        assert [unbox(item) for item in boxed] == [0, 128]
        assert scalar_kind_of(boxed[0]) is ScalarKind.INT16

    def test_box_rejects_other_values(self):
        with pytest.raises(TypeError):
            box_array([1, 2])

    def test_unbox_plain_values(self):
        assert unbox(5) == 5
        assert unbox(ctypes.c_char(b"\xe9")) == "\xe9"
