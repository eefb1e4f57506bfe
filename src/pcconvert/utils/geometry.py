"""Array helpers for point and normal buffers."""

from __future__ import annotations

import numpy as np


def box_indices(points: np.ndarray, min_bound, max_bound) -> np.ndarray:
    """Indices of points inside the axis-aligned box, bounds inclusive, in input order.

    Args:
        points: (N, 3) array of positions.
        min_bound: (3,) lower corner.
        max_bound: (3,) upper corner.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    lo = np.asarray(min_bound, dtype=np.float64)
    hi = np.asarray(max_bound, dtype=np.float64)
    mask = np.all((points >= lo) & (points <= hi), axis=1)
    return np.flatnonzero(mask)


def flip_toward(vectors: np.ndarray, direction) -> tuple[np.ndarray, np.ndarray]:
    """Negate every vector whose dot product with ``direction`` is negative.

    Returns the new (N, 3) array and the boolean mask of flipped rows.
    Magnitudes are unchanged; rows with a zero or positive dot product are
    returned as-is.
    """
    vectors = np.array(vectors, dtype=np.float64).reshape(-1, 3)
    d = np.asarray(direction, dtype=np.float64).reshape(3)
    flipped = vectors @ d < 0.0
    vectors[flipped] *= -1.0
    return vectors, flipped


def align_signs(vectors: np.ndarray, reference: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Flip each row of ``vectors`` that points away from the same row of ``reference``."""
    vectors = np.array(vectors, dtype=np.float64).reshape(-1, 3)
    reference = np.asarray(reference, dtype=np.float64).reshape(-1, 3)
    if len(vectors) != len(reference):
        raise ValueError(
            f"Cannot align {len(vectors)} vectors with {len(reference)} reference vectors"
        )
    flipped = np.einsum("ij,ij->i", vectors, reference) < 0.0
    vectors[flipped] *= -1.0
    return vectors, flipped
