# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Flat ``float32`` storage shared by tensors.

A :class:`Buffer` is either *borrowed* (a read-only window onto memory owned by
someone else, such as a memory-mapped weight file) or *owned* (a private,
writable NumPy array). Owned storage may be handed out to several views at
once; the first write through a shared handle detaches that handle onto its
own copy, so views never observe each other's writes.
"""

from __future__ import annotations

import logging
from typing import Any, Union

import numpy as np

from .errors import TensorError

logger = logging.getLogger(__name__)

DTYPE = np.float32
ELEMENT_SIZE = np.dtype(DTYPE).itemsize


def _readonly_view(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class Buffer:
    """One-dimensional ``float32`` storage in either owned or borrowed mode."""

    __slots__ = ("_data", "_owned", "_shared", "_exported")

    def __init__(self, data: np.ndarray, owned: bool):
        self._data = data
        self._owned = owned
        # Set on both handles once owned storage is shared between tensors.
        self._shared = False
        # Set once writable() has handed the backing array to a caller.
        self._exported = False

    @classmethod
    def owned(cls, values: Any) -> "Buffer":
        """Copy ``values`` (any float sequence or array) into private storage."""

        data = np.array(values, dtype=DTYPE).reshape(-1)
        return cls(data, owned=True)

    @classmethod
    def borrowed(cls, source: Union[np.ndarray, bytes, bytearray, memoryview, Any]) -> "Buffer":
        """Wrap external memory read-only without copying.

        ``source`` may be a C-contiguous ``float32`` NumPy array or any other
        object exposing the buffer protocol, whose bytes are reinterpreted and
        must hold a whole number of ``float32`` values. Arrays that could only
        be wrapped by copying are rejected.
        """

        if isinstance(source, np.ndarray):
            if source.dtype != DTYPE:
                raise TypeError(
                    f"cannot borrow a {source.dtype} array without copying; expected float32"
                )
            if not source.flags.c_contiguous:
                raise ValueError("cannot borrow a non-contiguous array without copying")
            data = source.reshape(-1)
        else:
            data = np.frombuffer(source, dtype=DTYPE)
        return cls(_readonly_view(data), owned=False)

    @property
    def is_owned(self) -> bool:
        return self._owned

    def __len__(self) -> int:
        return int(self._data.size)

    def __getitem__(self, offset: int) -> float:
        return float(self._data[offset])

    def share(self) -> "Buffer":
        """Return another handle onto the same memory without copying.

        Owned storage whose writable array has already been handed out is
        copied instead, since writes through that array must stay private.
        """

        if self._owned and self._exported:
            logger.debug("copying exported owned buffer of %d elements on share", len(self))
            return Buffer(self._data.copy(), owned=True)

        other = Buffer(self._data, self._owned)
        if self._owned:
            self._shared = True
            other._shared = True
        return other

    def clone(self) -> "Buffer":
        """Deep-copy owned storage; re-borrow borrowed storage."""

        if self._owned:
            return Buffer(self._data.copy(), owned=True)
        return Buffer(self._data, owned=False)

    def slice(self, start: int, stop: int) -> "Buffer":
        """Sub-range ``[start, stop)``: re-borrowed, or copied when owned."""

        if not self._owned:
            return Buffer(self._data[start:stop], owned=False)
        logger.debug("copying owned sub-range [%d, %d) of %d elements", start, stop, len(self))
        return Buffer(self._data[start:stop].copy(), owned=True)

    def readonly(self) -> np.ndarray:
        return _readonly_view(self._data)

    def writable(self) -> np.ndarray:
        """Return the writable backing array, detaching shared owned storage first."""

        if not self._owned:
            raise TensorError("can not mut a borrowed tensor")
        if self._shared:
            logger.debug("detaching shared owned buffer of %d elements before write", len(self))
            self._data = self._data.copy()
            self._shared = False
        self._exported = True
        return self._data


__all__ = ["Buffer", "DTYPE", "ELEMENT_SIZE"]
