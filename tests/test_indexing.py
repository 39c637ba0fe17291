# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from stridetensor import Tensor, TensorError


def test_at_row_major(matrix):
    assert matrix.strides == (3, 1)
    assert matrix.at([0, 0]) == 1.0
    assert matrix.at([0, 2]) == 3.0
    assert matrix.at([1, 0]) == 4.0
    assert matrix.at([1, 2]) == 6.0


def test_getitem_forwards_to_at(matrix):
    assert matrix[1, 1] == 5.0
    assert Tensor([7.0, 8.0], [2])[1] == 8.0


@pytest.mark.parametrize("index", [[0, 4], [2, 0], [0], [0, 0, 0], [-1, 0]])
def test_at_rejects_bad_index(matrix, index):
    with pytest.raises(TensorError, match="for tensor of shape"):
        matrix.at(index)


def test_error_message_names_index_and_shape(matrix):
    with pytest.raises(TensorError) as excinfo:
        matrix.at([0, 4])
    assert "[0, 4]" in str(excinfo.value)
    assert "[2, 3]" in str(excinfo.value)


def test_at_unchecked_uses_strides(matrix):
    t = matrix.transpose(1, 0)
    assert t.at_unchecked([2, 1]) == 6.0
    assert t.at_unchecked([1, 0]) == 2.0


def test_at_on_transposed(matrix):
    t = matrix.transpose([1, 0])
    assert t.strides == (1, 3)
    assert [t.at([i, 0]) for i in range(3)] == [1.0, 2.0, 3.0]
    assert [t.at([i, 1]) for i in range(3)] == [4.0, 5.0, 6.0]
    with pytest.raises(TensorError):
        t.at([4, 0])
