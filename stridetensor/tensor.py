# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Strided ``float32`` tensor over a flat buffer.

A tensor pairs a :class:`~stridetensor._buffer.Buffer` with a shape and a
per-dimension stride. Transposes and reshapes only rewrite that metadata;
``contiguous()`` is the one place a strided layout is copied into fresh
row-major storage.
"""

from __future__ import annotations

import logging
import operator
from numbers import Integral
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._buffer import DTYPE, ELEMENT_SIZE, Buffer
from ._iter import Tensor1DIterator, TensorIterator
from .errors import TensorError

logger = logging.getLogger(__name__)

ShapeLike = Union[int, Sequence[int]]


def _normalize_dims(dims: Tuple[Any, ...]) -> Tuple[int, ...]:
    """Accept both ``f(2, 3)`` and ``f([2, 3])`` call styles."""

    if len(dims) == 1 and isinstance(dims[0], (list, tuple)):
        dims = tuple(dims[0])
    result = []
    for d in dims:
        if not isinstance(d, Integral) or isinstance(d, bool):
            raise TypeError(f"dimensions must be integers, got {d!r}")
        result.append(int(d))
    return tuple(result)


def _normalize_shape(shape: Sequence[Any]) -> Tuple[int, ...]:
    dims = _normalize_dims(tuple(shape))
    if any(d < 0 for d in dims):
        raise ValueError(f"shape dimensions must be non-negative, got {list(dims)}")
    return dims


def _product(values: Sequence[int]) -> int:
    result = 1
    for v in values:
        result *= v
    return result


def _canonical_strides(shape: Sequence[int]) -> Tuple[int, ...]:
    """Row-major strides: the last dimension has stride 1."""

    strides = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        strides[i] = strides[i + 1] * shape[i + 1]
    return tuple(strides)


class Tensor:
    """
    A multi-dimensional ``float32`` array addressed through shape and strides.

    The buffer is either owned (private and writable) or borrowed (a read-only
    window onto external memory). Only owned tensors can be mutated.
    """

    __slots__ = ("_buf", "_shape", "_strides", "_name")

    @classmethod
    def _from_parts(
        cls,
        buf: Buffer,
        shape: Tuple[int, ...],
        strides: Tuple[int, ...],
        name: Optional[str],
    ) -> "Tensor":
        """Build a view without re-validating the buffer length."""

        instance = cls.__new__(cls)
        instance._buf = buf
        instance._shape = shape
        instance._strides = strides
        instance._name = name
        return instance

    def __init__(self, data: Any, shape: Optional[Sequence[int]] = None):
        """
        Initialize a tensor with row-major strides.

        Args:
            data: A :class:`Buffer` (its ownership mode is kept), another
                ``Tensor`` (its logical elements in row-major order; exact
                contiguous sources have their buffer cloned, strided ones are
                materialized into owned storage), or a NumPy array / float
                sequence (copied into owned storage)
            shape: Logical shape; inferred from ``data`` when omitted for
                array-like input

        Raises:
            TensorError: If the buffer length differs from ``product(shape)``.

        Examples:
            >>> t = Tensor([1, 2, 3, 4, 5, 6], [2, 3])
            >>> t.strides
            (3, 1)
        """
        if isinstance(data, Tensor):
            if data.is_contiguous() and len(data._buf) == data.numel():
                buf = data._buf.clone()
            else:
                values = np.fromiter(data.iter(), dtype=DTYPE, count=data.numel())
                buf = Buffer(values, owned=True)
            if shape is None:
                shape = data.shape
        elif isinstance(data, Buffer):
            if shape is None:
                raise TypeError("shape is required when constructing from a Buffer")
            buf = data
        else:
            if shape is None:
                shape = np.shape(data)
            buf = Buffer.owned(data)

        shape = _normalize_shape(shape)
        if len(buf) != _product(shape):
            raise TensorError(f"invalid shape {list(shape)} for data of length {len(buf)}")

        self._buf = buf
        self._shape = shape
        self._strides = _canonical_strides(shape)
        self._name: Optional[str] = None

    # Core properties
    @property
    def shape(self) -> Tuple[int, ...]:
        """Get tensor shape as tuple."""
        return self._shape

    @property
    def strides(self) -> Tuple[int, ...]:
        """Element strides of the tensor."""
        return self._strides

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def T(self) -> "Tensor":
        """Reverse all dimensions."""
        return self.transpose(tuple(reversed(range(self.ndim))))

    def with_name(self, name: str) -> "Tensor":
        """Attach a descriptive label and return ``self``."""
        self._name = str(name)
        return self

    def numel(self) -> int:
        """Get total number of elements."""
        return _product(self._shape)

    def __len__(self) -> int:
        return self.numel()

    def is_owned(self) -> bool:
        """Check if the tensor owns (and may mutate) its buffer."""
        return self._buf.is_owned

    def is_contiguous(self) -> bool:
        """Check if the strides match the row-major layout for the shape."""
        if not self._strides:
            return True
        if self._strides[-1] != 1:
            return False

        last_stride = 1
        for i in range(self.ndim - 1, -1, -1):
            if self._strides[i] != last_stride:
                return False
            last_stride *= self._shape[i]
        return True

    # Element access
    def _buf_offset(self, index: Sequence[int]) -> int:
        offset = 0
        for i, stride in zip(index, self._strides):
            offset += i * stride
        return offset

    def at(self, index: Sequence[int]) -> float:
        """Return the element at ``index`` after rank and bounds checks."""
        index = tuple(operator.index(i) for i in index)
        if len(index) != self.ndim:
            raise TensorError(
                f"invalid index {list(index)} for tensor of shape {list(self._shape)}"
            )
        for i, dim in zip(index, self._shape):
            if i < 0 or i >= dim:
                raise TensorError(
                    f"invalid index {list(index)} for tensor of shape {list(self._shape)}"
                )
        return self.at_unchecked(index)

    def at_unchecked(self, index: Sequence[int]) -> float:
        """Return the element at ``index`` without validation."""
        return self._buf[self._buf_offset(index)]

    def __getitem__(self, index) -> float:
        if not isinstance(index, tuple):
            index = (index,)
        return self.at(index)

    # Views
    def view(self, *shape: ShapeLike) -> "Tensor":
        """Reinterpret a contiguous tensor with a new shape, sharing storage."""
        shape = _normalize_shape(_normalize_dims(shape))
        if _product(shape) != self.numel():
            raise TensorError(f"invalid shape {list(shape)} for data of length {self.numel()}")
        if not self.is_contiguous():
            raise TensorError("cannot view a non-contiguous tensor")

        result = Tensor(self._buf.share(), shape)
        result._name = self._name
        return result

    def reshape(self, *shape: ShapeLike) -> "Tensor":
        """Alias for view."""
        return self.view(*shape)

    def transpose(self, *perm: ShapeLike) -> "Tensor":
        """Permute dimensions by rewriting shape and strides; never copies."""
        perm = _normalize_dims(perm)
        if len(perm) != self.ndim or sorted(perm) != list(range(self.ndim)):
            raise TensorError(
                f"invalid transpose {list(perm)} for tensor of shape {list(self._shape)}"
            )

        new_shape = tuple(self._shape[d] for d in perm)
        new_strides = tuple(self._strides[d] for d in perm)
        return self._from_parts(self._buf.share(), new_shape, new_strides, self._name)

    def permute(self, *perm: ShapeLike) -> "Tensor":
        """Alias for transpose."""
        return self.transpose(*perm)

    def subtensor(self, row: int) -> "Tensor":
        """
        Drop the leading dimension by selecting ``row``.

        Contiguous tensors slice exactly ``strides[0]`` elements. For other
        layouts the slice runs from the row's first element to the end of the
        buffer; strided reads stay correct but ``ref_buf()`` on the result
        exposes the trailing elements too. Owned storage is copied, borrowed
        storage is re-borrowed.
        """
        if self.ndim <= 1:
            raise TensorError("cannot subtensor a 1D tensor")
        row = operator.index(row)
        if row < 0 or row >= self._shape[0]:
            raise TensorError(f"invalid row {row} for tensor of shape {list(self._shape)}")

        if self.is_contiguous():
            offset = row * self._strides[0]
            buf = self._buf.slice(offset, offset + self._strides[0])
        else:
            idx = [0] * self.ndim
            idx[0] = row
            offset = self._buf_offset(idx)
            buf = self._buf.slice(offset, len(self._buf))

        return self._from_parts(buf, self._shape[1:], self._strides[1:], self._name)

    def subtensors(self) -> List["Tensor"]:
        """Return ``subtensor(i)`` for every row of the leading dimension."""
        if self.ndim <= 1:
            raise TensorError("cannot subtensor a 1D tensor")
        return [self.subtensor(i) for i in range(self._shape[0])]

    def contiguous(self) -> "Tensor":
        """Return a row-major tensor, copying only when the layout is strided."""
        if self.is_contiguous():
            return self._from_parts(self._buf.share(), self._shape, self._strides, self._name)

        logger.debug(
            "materializing non-contiguous tensor %s of shape %s",
            self._name or "<unnamed>",
            list(self._shape),
        )
        data = np.fromiter(self.iter(), dtype=DTYPE, count=self.numel())
        result = Tensor(Buffer(data, owned=True), self._shape)
        result._name = self._name
        return result

    # Iteration
    def iter(self) -> Iterator[float]:
        """Return a fresh iterator over the elements in row-major order."""
        if self.ndim == 1:
            return Tensor1DIterator(self)
        return TensorIterator(self)

    def __iter__(self) -> Iterator[float]:
        return self.iter()

    # Chunks and raw buffers
    def _chunk_range(self, pos: Sequence[int], kind: str) -> Tuple[int, int]:
        pos = tuple(operator.index(p) for p in pos)
        if not pos or len(pos) >= self.ndim or any(
            p < 0 or p >= dim for p, dim in zip(pos, self._shape)
        ):
            raise TensorError(
                f"invalid {kind} position {list(pos)} for tensor of shape {list(self._shape)}"
            )
        offset_start = self._buf_offset(pos)
        return offset_start, offset_start + self._strides[len(pos) - 1]

    def ref_chunk(self, pos: Sequence[int]) -> np.ndarray:
        """Read-only view of the trailing block addressed by the prefix ``pos``."""
        if not self.is_contiguous():
            raise TensorError("tensor have to be contiguous to get chunk")
        start, end = self._chunk_range(pos, "chunk")
        return self._buf.readonly()[start:end]

    def mut_chunk(self, pos: Sequence[int]) -> np.ndarray:
        """Writable view of the trailing block addressed by ``pos`` (owned only)."""
        if not self.is_contiguous():
            raise TensorError("tensor have to be contiguous to get chunk")
        if not self.is_owned():
            raise TensorError("only owned tensor can be mut")
        start, end = self._chunk_range(pos, "mut chunk")
        return self._buf.writable()[start:end]

    def copy_chunk(self, pos: Sequence[int], data: "Tensor") -> None:
        """Overwrite the chunk at ``pos`` with the flat buffer of ``data``."""
        chunk = self.mut_chunk(pos)
        source = data.ref_buf()
        if source.size != chunk.size:
            raise ValueError(
                f"source length {source.size} does not match chunk length {chunk.size}"
            )
        chunk[:] = source

    def ref_buf(self) -> np.ndarray:
        """Read-only view of the whole underlying buffer."""
        return self._buf.readonly()

    def mut_buf(self) -> np.ndarray:
        """Writable view of the whole underlying buffer (owned only)."""
        return self._buf.writable()

    # Copies and conversions
    def clone(self) -> "Tensor":
        """Copy owned storage, re-borrow borrowed storage."""
        return self._from_parts(self._buf.clone(), self._shape, self._strides, self._name)

    def numpy(self) -> np.ndarray:
        """Materialize the logical elements as a new NumPy array."""
        data = np.fromiter(self.iter(), dtype=DTYPE, count=self.numel())
        return data.reshape(self._shape)

    def tolist(self) -> Any:
        """Convert to (nested) Python list."""
        return self.numpy().tolist()

    def array_equal(self, other: "Tensor") -> bool:
        """Check if tensors have the same shape and elements."""
        if self._shape != other.shape:
            return False
        return all(a == b for a, b in zip(self.iter(), other.iter()))

    def __repr__(self) -> str:
        mode = "owned" if self.is_owned() else "borrowed"
        name = f", name={self._name!r}" if self._name is not None else ""
        return (
            f"Tensor(shape={list(self._shape)}, strides={list(self._strides)}, "
            f"{mode}{name})"
        )

    # Static tensor creation methods
    @staticmethod
    def zeros(*shape: ShapeLike) -> "Tensor":
        """Create an owned tensor filled with zeros."""
        shape = _normalize_shape(_normalize_dims(shape))
        data = np.zeros(_product(shape), dtype=DTYPE)
        return Tensor(Buffer(data, owned=True), shape)

    @staticmethod
    def from_raw_bytes(buf: Any, shape: Sequence[int]) -> "Tensor":
        """
        Reinterpret raw bytes as a borrowed ``float32`` tensor without copying.

        ``buf`` must expose the buffer protocol and stay alive for as long as
        the tensor is used. A byte length that is not a multiple of 4 is a
        caller error and raises ``ValueError``, not ``TensorError``.
        """
        nbytes = memoryview(buf).nbytes
        if nbytes % ELEMENT_SIZE != 0:
            raise ValueError(
                f"Length of buffer ({nbytes} bytes) must be a multiple of float32 size"
            )
        return Tensor(Buffer.borrowed(np.frombuffer(buf, dtype=DTYPE)), shape)

    @staticmethod
    def from_numpy(array: "np.ndarray") -> "Tensor":
        """Create an owned tensor from a copy of a NumPy array."""
        return Tensor(Buffer.owned(array), array.shape)

    @staticmethod
    def from_numpy_shared(array: "np.ndarray") -> "Tensor":
        """Create a borrowed, read-only tensor over a NumPy array."""
        return Tensor(Buffer.borrowed(array), array.shape)


# Convenience functions for tensor creation (NumPy-style)
def tensor(data: Any, shape: Optional[Sequence[int]] = None) -> Tensor:
    """Create a tensor from data."""
    return Tensor(data, shape)


def zeros(*shape: ShapeLike) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor.zeros(*shape)


def from_raw_bytes(buf: Any, shape: Sequence[int]) -> Tensor:
    """Create a borrowed tensor over raw ``float32`` bytes."""
    return Tensor.from_raw_bytes(buf, shape)


def from_numpy(array: "np.ndarray") -> Tensor:
    """Create a tensor from a NumPy array."""
    return Tensor.from_numpy(array)


def from_numpy_shared(array: "np.ndarray") -> Tensor:
    """Create a tensor sharing a NumPy array's memory read-only."""
    return Tensor.from_numpy_shared(array)


# Export all public symbols
__all__ = [
    "Tensor",
    "tensor",
    "zeros",
    "from_raw_bytes",
    "from_numpy",
    "from_numpy_shared",
]
