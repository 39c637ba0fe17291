# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st
from stridetensor import Buffer, Tensor, TensorError


@pytest.mark.parametrize(
    "shape",
    [(6,), (2, 3), (3, 2), (2, 3, 1), (1, 1, 6), (1, 2, 1, 3)],
)
def test_new_accepts_matching_length(shape):
    t = Tensor(np.arange(6, dtype=np.float32), shape)
    assert t.shape == shape
    assert len(t) == 6
    assert t.numel() == 6
    assert t.is_owned()


@pytest.mark.parametrize("shape", [(5,), (2, 2), (7,), (2, 3, 2), (0,)])
def test_new_rejects_length_mismatch(shape):
    with pytest.raises(TensorError, match="invalid shape"):
        Tensor([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], shape)


@pytest.mark.parametrize("shape", [(6,), (2, 3), (2, 3, 1), (4, 1, 5, 2), (3, 0, 2)])
def test_canonical_strides(shape):
    t = Tensor.zeros(shape)
    strides = t.strides
    assert strides[-1] == 1
    for i in range(len(shape) - 1):
        assert strides[i] == strides[i + 1] * shape[i + 1]
    assert t.is_contiguous()


def test_strides_match_numpy_layout():
    t = Tensor.zeros(4, 1, 5, 2)
    expected = np.zeros((4, 1, 5, 2), dtype=np.float32).strides
    assert t.strides == tuple(s // 4 for s in expected)


def test_scalar_tensor_is_contiguous():
    t = Tensor([3.5], [])
    assert t.shape == ()
    assert t.strides == ()
    assert t.is_contiguous()
    assert t.at([]) == 3.5
    assert list(t) == [3.5]


def test_shape_inferred_from_nested_list():
    t = Tensor([[1, 2, 3], [4, 5, 6]])
    assert t.shape == (2, 3)
    assert t.strides == (3, 1)


def test_buffer_requires_shape():
    with pytest.raises(TypeError):
        Tensor(Buffer.owned([1.0, 2.0]))


def test_negative_and_non_integer_shapes():
    with pytest.raises(ValueError):
        Tensor.zeros(-1, 2)
    with pytest.raises(TypeError):
        Tensor.zeros(2.0, 3)


def test_zeros_is_owned_and_zero_filled():
    t = st.zeros(2, 3)
    assert t.is_owned()
    assert t.shape == (2, 3)
    assert list(t) == [0.0] * 6
    assert t.ref_buf().dtype == np.float32


def test_zeros_accepts_sequence_and_varargs():
    assert Tensor.zeros([2, 3]).shape == Tensor.zeros(2, 3).shape == (2, 3)


def test_copy_constructor_does_not_alias(matrix):
    copy = Tensor(matrix)
    copy.mut_buf()[0] = 42.0
    assert matrix.at([0, 0]) == 1.0
    assert copy.at([0, 0]) == 42.0


def test_from_raw_bytes_is_borrowed():
    raw = np.arange(1, 7, dtype=np.float32).tobytes()
    t = Tensor.from_raw_bytes(raw, [2, 3])
    assert not t.is_owned()
    assert t.shape == (2, 3)
    assert list(t) == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_from_raw_bytes_does_not_copy():
    raw = bytearray(np.arange(4, dtype=np.float32).tobytes())
    t = st.from_raw_bytes(raw, [4])
    raw[0:4] = np.float32(9.0).tobytes()
    assert t.at([0]) == 9.0


def test_from_raw_bytes_length_mismatch_is_tensor_error():
    raw = np.arange(5, dtype=np.float32).tobytes()
    with pytest.raises(TensorError):
        Tensor.from_raw_bytes(raw, [2, 3])


def test_from_raw_bytes_partial_element_is_caller_error():
    with pytest.raises(ValueError, match="multiple of float32"):
        Tensor.from_raw_bytes(b"\x00" * 7, [1])
    assert not issubclass(TensorError, ValueError)


def test_with_name_is_cosmetic(matrix):
    assert matrix.name is None
    named = matrix.with_name("weights")
    assert named is matrix
    assert matrix.name == "weights"
    assert matrix.transpose(1, 0).name == "weights"
    assert "weights" in repr(matrix)


def test_repr_reports_layout(matrix):
    assert repr(matrix) == "Tensor(shape=[2, 3], strides=[3, 1], owned)"
    raw = np.zeros(2, dtype=np.float32).tobytes()
    assert "borrowed" in repr(Tensor.from_raw_bytes(raw, [2]))


def test_copy_constructor_of_transposed_keeps_logical_order(matrix):
    source = matrix.transpose(1, 0)
    copy = Tensor(source)
    assert copy.shape == (3, 2)
    assert copy.strides == (2, 1)
    assert copy.is_owned()
    assert list(copy) == list(source) == [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]


def test_copy_constructor_of_strided_subtensor(matrix):
    source = matrix.transpose(1, 0).subtensor(1)
    copy = Tensor(source)
    assert copy.shape == (2,)
    assert copy.ref_buf().tolist() == [2.0, 5.0]


def test_copy_constructor_of_borrowed_sources():
    raw = np.arange(6, dtype=np.float32).tobytes()
    borrowed = Tensor.from_raw_bytes(raw, [2, 3])
    assert not Tensor(borrowed).is_owned()
    strided = Tensor(borrowed.transpose(1, 0))
    assert strided.is_owned()
    assert list(strided) == [0.0, 3.0, 1.0, 4.0, 2.0, 5.0]
