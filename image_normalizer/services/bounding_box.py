import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from ..models.bounding_box import BoundingBox
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

# (top, bottom, left, right) of one partition, in full-image coordinates
Extents = Tuple[int, int, int, int]


def split_rows(height: int, workers: int, min_rows: int) -> List[Tuple[int, int]]:
    """Contiguous [start, stop) row ranges covering 0..height."""
    parts = max(1, min(workers, height // max(1, min_rows)))
    bounds = np.linspace(0, height, parts + 1).astype(int)
    return [(int(start), int(stop)) for start, stop in zip(bounds[:-1], bounds[1:]) if stop > start]


def scan_partition(mask: np.ndarray, row_start: int, row_stop: int) -> Optional[Extents]:
    """Foreground (value 0) extents of mask rows [row_start, row_stop), or None."""
    band = mask[row_start:row_stop] == 0

    rows = np.flatnonzero(band.any(axis=1))
    if rows.size == 0:
        return None

    cols = np.flatnonzero(band.any(axis=0))
    return (
        row_start + int(rows[0]),
        row_start + int(rows[-1]),
        int(cols[0]),
        int(cols[-1]),
    )


def merge_extents(partials: List[Optional[Extents]]) -> Optional[Extents]:
    found = [p for p in partials if p is not None]
    if not found:
        return None

    return (
        min(p[0] for p in found),
        max(p[1] for p in found),
        min(p[2] for p in found),
        max(p[3] for p in found),
    )


def find_bounding_box(mask: PixelBuffer, workers: int = 4, min_rows_per_partition: int = 64) -> Optional[BoundingBox]:
    """
    Minimal box enclosing every 0 pixel of a binary mask.

    Rows are split into partitions scanned on a thread pool; every worker
    returns its own extents and the results are merged here once all of
    them are done. Returns None when the mask has no foreground.
    """
    if mask.channels != 1:
        raise ValueError("Bounding box scan needs a single channel mask")

    data = mask.data
    ranges = split_rows(mask.height, workers, min_rows_per_partition)

    if len(ranges) == 1:
        partials = [scan_partition(data, *ranges[0])]
    else:
        with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
            futures = [executor.submit(scan_partition, data, start, stop) for start, stop in ranges]
            partials = [f.result() for f in futures]

    extents = merge_extents(partials)
    if extents is None:
        logger.debug("No foreground found in %dx%d mask", mask.width, mask.height)
        return None

    top, bottom, left, right = extents
    box = BoundingBox(
        top=max(top, 0),
        left=max(left, 0),
        bottom=bottom,
        right=right,
    ).clamp_to(mask.width, mask.height)

    logger.debug("Foreground box %s from %d partition(s)", box, len(ranges))
    return box
