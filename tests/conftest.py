# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stridetensor import Tensor  # noqa: E402


@pytest.fixture
def matrix():
    """Owned 2x3 tensor holding 1..6."""
    return Tensor([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], [2, 3])
