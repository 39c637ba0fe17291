# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Weight Blob Demo for Stridetensor

This script demonstrates the buffer ownership model by:
1. Borrowing a raw float32 weight blob without copying it
2. Taking zero-copy transposed views and walking them in row-major order
3. Materializing a strided view into owned storage
4. Assembling an owned tensor row by row with copy_chunk
"""

import mmap
import tempfile

import numpy as np

import stridetensor as st


def write_blob(path):
    weights = np.arange(12, dtype=np.float32)
    with open(path, "wb") as f:
        f.write(weights.tobytes())


def demo_borrowed_weights(path):
    print("=" * 60)
    print("BORROWED WEIGHTS DEMO")
    print("=" * 60)

    with open(path, "rb") as f:
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as blob:
            w = st.from_raw_bytes(blob, [3, 4]).with_name("layer0.weight")
            print(f"Weights: {w}")
            print(f"Row 1 chunk: {w.ref_chunk([1]).tolist()}")

            wt = w.transpose(1, 0)
            print(f"Transposed: {wt} contiguous={wt.is_contiguous()}")
            print(f"Transposed elements: {list(wt)}")

            packed = wt.contiguous()
            print(f"Materialized: {packed} buffer={packed.ref_buf().tolist()}")

            try:
                w.mut_chunk([0])
            except st.TensorError as exc:
                print(f"Mutation refused: {exc}")

            # Views of the blob must be dropped before the mapping closes.
            del w, wt
    return packed


def demo_assemble(packed):
    print("\n" + "=" * 60)
    print("ASSEMBLY DEMO")
    print("=" * 60)

    out = st.zeros(packed.shape)
    for i, row in enumerate(packed.subtensors()):
        out.copy_chunk([i], row)
    print(f"Assembled: {out.tolist()}")
    print(f"Equal to source: {out.array_equal(packed)}")


def main():
    with tempfile.TemporaryDirectory() as tmp:
        path = f"{tmp}/weights.bin"
        write_blob(path)
        packed = demo_borrowed_weights(path)
        demo_assemble(packed)


if __name__ == "__main__":
    main()
