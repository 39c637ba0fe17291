# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
from typing import Iterable

from . import functional, numpy_compat
from ._buffer import DTYPE, ELEMENT_SIZE, Buffer
from .errors import TensorError
from .tensor import Tensor

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Tensor factories map directly to the Tensor static constructors.
tensor = Tensor
zeros = Tensor.zeros
from_raw_bytes = Tensor.from_raw_bytes
from_numpy = Tensor.from_numpy
from_numpy_shared = Tensor.from_numpy_shared
asarray = numpy_compat.asarray

_FUNCTIONAL_FORWARDERS: Iterable[str] = (
    "view",
    "reshape",
    "transpose",
    "permute",
    "subtensor",
    "subtensors",
    "contiguous",
)

for _name in _FUNCTIONAL_FORWARDERS:
    globals()[_name] = getattr(functional, _name)


__all__ = [
    "Tensor",
    "TensorError",
    "Buffer",
    "DTYPE",
    "ELEMENT_SIZE",
    "tensor",
    "functional",
    "numpy_compat",
    "zeros",
    "from_raw_bytes",
    "from_numpy",
    "from_numpy_shared",
    "asarray",
    "view",
    "reshape",
    "transpose",
    "permute",
    "subtensor",
    "subtensors",
    "contiguous",
]
