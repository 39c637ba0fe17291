# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""NumPy interoperability helpers."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np

from .tensor import Tensor, from_numpy, from_numpy_shared


def asarray(tensor: Tensor, dtype: Optional[Any] = None) -> np.ndarray:
    """Materialize ``tensor`` in row-major order as a new NumPy array."""

    array = tensor.numpy()
    if dtype is not None:
        array = array.astype(dtype, copy=False)
    return array


def frombuffer(buffer: Any, shape: Sequence[int]) -> Tensor:
    """Borrow raw ``float32`` bytes as a tensor, like :func:`numpy.frombuffer`."""

    return Tensor.from_raw_bytes(buffer, shape)


__all__ = ["asarray", "frombuffer", "from_numpy", "from_numpy_shared"]
