# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations


class TensorError(RuntimeError):
    """Raised when a tensor operation violates a shape, layout or ownership contract."""


__all__ = ["TensorError"]
