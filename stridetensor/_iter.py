# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Row-major element cursors over strided tensors."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor


class TensorIterator:
    """Yield elements in row-major logical order for any stride layout.

    The logical position is decomposed into a multi-index against the shape,
    last dimension first, and the index is then addressed through the strides.
    """

    __slots__ = ("_tensor", "_logical_pos", "_length", "_idx_buf")

    def __init__(self, tensor: "Tensor"):
        self._tensor = tensor
        self._logical_pos = 0
        self._length = tensor.numel()
        self._idx_buf: List[int] = [0] * tensor.ndim

    def __iter__(self) -> "TensorIterator":
        return self

    def __next__(self) -> float:
        if self._logical_pos >= self._length:
            raise StopIteration

        lp = self._logical_pos
        idx = self._idx_buf
        shape = self._tensor.shape
        for i in range(len(shape) - 1, -1, -1):
            dim = shape[i]
            idx[i] = lp % dim
            lp //= dim

        self._logical_pos += 1
        return self._tensor.at_unchecked(idx)

    def __length_hint__(self) -> int:
        return self._length - self._logical_pos


class Tensor1DIterator:
    """Rank-1 fast path: the physical offset is ``pos * strides[0]``."""

    __slots__ = ("_tensor", "_stride", "_logical_pos", "_length")

    def __init__(self, tensor: "Tensor"):
        self._tensor = tensor
        self._stride = tensor.strides[0]
        self._logical_pos = 0
        self._length = tensor.shape[0]

    def __iter__(self) -> "Tensor1DIterator":
        return self

    def __next__(self) -> float:
        if self._logical_pos >= self._length:
            raise StopIteration

        physical_pos = self._logical_pos * self._stride
        self._logical_pos += 1
        return self._tensor._buf[physical_pos]

    def __length_hint__(self) -> int:
        return self._length - self._logical_pos


__all__ = ["TensorIterator", "Tensor1DIterator"]
