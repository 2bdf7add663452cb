"""
Coordinate Data Generator
=========================
Produces batches of synthetic survey points laid out on a regular grid with a
small random jitter. Used to populate the coordinate table without a backend
and to stress-test the table with large row counts.

The random source is passed in explicitly so tests (and callers who need a
replayable batch) can supply a seeded ``numpy.random.Generator``.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from surveyeditor.config import (
    DEFAULT_POINT_COUNT, GRID_COLUMNS, GRID_SPACING, ORIGIN_X, ORIGIN_Y,
    XY_JITTER, Z_BASE, Z_RANGE
)
from surveyeditor.model.points import CoordinatePoint, PointType, format_point_name, round_coordinate

logger = logging.getLogger(__name__)

POINT_TYPES: List[PointType] = list(PointType)


def generate_coordinate_data(
    count: int = DEFAULT_POINT_COUNT,
    rng: Optional[np.random.Generator] = None,
) -> List[CoordinatePoint]:
    """
    Generate ``count`` survey points ordered by their 1-based index.

    Args:
        count: Number of points to create. Zero yields an empty list.
        rng: Random source. A fresh unseeded generator is used when omitted.

    Returns:
        List of CoordinatePoint with ids "1".."count".
    """
    if count < 0:
        raise ValueError(f"Point count must be non-negative, got {count}.")

    if rng is None:
        rng = np.random.default_rng()

    index = np.arange(1, count + 1)
    type_idx = rng.integers(0, len(POINT_TYPES), size=count)

    xs = ORIGIN_X + (index % GRID_COLUMNS) * GRID_SPACING + rng.uniform(0.0, XY_JITTER, size=count)
    ys = ORIGIN_Y - (index // GRID_COLUMNS) * GRID_SPACING + rng.uniform(0.0, XY_JITTER, size=count)
    zs = Z_BASE + rng.uniform(0.0, Z_RANGE, size=count)

    points: List[CoordinatePoint] = []
    for i, t, x, y, z in zip(index.tolist(), type_idx.tolist(), xs.tolist(), ys.tolist(), zs.tolist()):
        point_type = POINT_TYPES[t]
        points.append(CoordinatePoint(
            id=str(i),
            point_name=format_point_name(point_type, i),
            x=round_coordinate(x),
            y=round_coordinate(y),
            z=round_coordinate(z),
            type=point_type,
            visible=True,
        ))

    logger.debug(f"Generated {len(points)} coordinate points.")
    return points
