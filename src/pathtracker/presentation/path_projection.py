"""Fit a path in meters into a pixel viewport."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from pathtracker.core.imu.motion_sample import PathPoint


def scale_path_to_viewport(
    path: Sequence[PathPoint],
    width: float,
    height: float,
    padding: float = 0.9,
) -> Tuple[List[Tuple[float, float]], float]:
    """
    Scale and center ``path`` inside a ``width`` x ``height`` viewport.

    The bounding box of the path is fitted with a uniform scale (an axis
    with zero extent counts as 1 m), shrunk by ``padding``, centered, and
    the y axis is flipped so north points up on screen.

    Returns:
        (pixel points, scale). An empty path gives ([], 1.0).
    """
    if not path:
        return [], 1.0

    points = np.array([(p.x, p.y) for p in path], dtype=float)
    mins = points.min(axis=0)
    spans = points.max(axis=0) - mins
    spans[spans == 0] = 1.0

    scale = float(min(width / spans[0], height / spans[1]) * padding)

    extent = (points.max(axis=0) - mins) * scale
    offset_x = (width - extent[0]) / 2
    offset_y = (height - extent[1]) / 2

    xs = (points[:, 0] - mins[0]) * scale + offset_x
    ys = height - ((points[:, 1] - mins[1]) * scale + offset_y)
    return [(float(x), float(y)) for x, y in zip(xs, ys)], scale
