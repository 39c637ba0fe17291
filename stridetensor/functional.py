# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Free-function forms of the tensor view operations."""

from __future__ import annotations

from typing import List, Sequence, Union

from .tensor import Tensor


def view(tensor: Tensor, shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.view(shape)


def reshape(tensor: Tensor, shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.reshape(shape)


def transpose(tensor: Tensor, perm: Sequence[int]) -> Tensor:
    return tensor.transpose(perm)


def permute(tensor: Tensor, perm: Sequence[int]) -> Tensor:
    return tensor.permute(perm)


def subtensor(tensor: Tensor, row: int) -> Tensor:
    return tensor.subtensor(row)


def subtensors(tensor: Tensor) -> List[Tensor]:
    return tensor.subtensors()


def contiguous(tensor: Tensor) -> Tensor:
    return tensor.contiguous()


__all__ = [
    "view",
    "reshape",
    "transpose",
    "permute",
    "subtensor",
    "subtensors",
    "contiguous",
]
