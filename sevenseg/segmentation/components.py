# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


# Author: Mohammad Saif Ul Haq
# Last Modified: 2026-10-19

"""Connected-component extraction for seven-segment strokes."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Tuple

import numpy as np

from ..config import ExtractionConfig
from ..utils import BoundingBox

logger = logging.getLogger(__name__)

UNASSIGNED = -1


@dataclass(eq=False)
class Segment:
    """One lit stroke of a digit: a maximal 4-connected foreground region."""

    pixels: np.ndarray  # (n, 2) view into the extraction arena, columns x, y
    centroid_x: int
    centroid_y: int
    box: BoundingBox
    cluster: int = UNASSIGNED

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> "Segment":
        count = len(pixels)
        if count == 0:
            raise ValueError("A segment needs at least one pixel")
        sums = pixels.sum(axis=0)
        return cls(
            pixels=pixels,
            centroid_x=int(sums[0]) // count,
            centroid_y=int(sums[1]) // count,
            box=BoundingBox.from_points(pixels),
        )

    @property
    def pixel_count(self) -> int:
        return len(self.pixels)

    @property
    def centroid(self) -> Tuple[int, int]:
        return self.centroid_x, self.centroid_y

    @property
    def width(self) -> int:
        return self.box.width

    @property
    def height(self) -> int:
        return self.box.height

    @property
    def is_vertical(self) -> bool:
        return self.box.height > self.box.width


def _row_runs(mask: np.ndarray) -> List[Tuple[np.ndarray, np.ndarray]]:
    """Return, per row, the inclusive ``(starts, ends)`` columns of every foreground run."""

    height, width = mask.shape
    padded = np.zeros((height, width + 2), dtype=np.int8)
    padded[:, 1:-1] = mask
    edges = np.diff(padded, axis=1)
    start_rows, start_cols = np.nonzero(edges == 1)
    _, end_cols = np.nonzero(edges == -1)
    bounds = np.cumsum(np.bincount(start_rows, minlength=height))[:-1]
    return list(zip(np.split(start_cols, bounds), np.split(end_cols - 1, bounds)))


def _flood(
    mask: np.ndarray,
    runs: List[Tuple[np.ndarray, np.ndarray]],
    seed_y: int,
    seed_run: int,
    spans: List[Tuple[int, int, int]],
) -> int:
    """Consume the region containing the seed run; append its ``(y, west, east)`` spans and return the pixel count."""

    height = mask.shape[0]
    queue: Deque[Tuple[int, int]] = deque([(seed_y, seed_run)])
    consumed = 0
    while queue:
        y, index = queue.popleft()
        starts, ends = runs[y]
        # A run is always cleared whole, so its first column tells whether it is still lit.
        west = int(starts[index])
        if not mask[y, west]:
            continue
        east = int(ends[index])

        mask[y, west : east + 1] = False
        spans.append((y, west, east))
        consumed += east - west + 1

        # One seed per run of the neighbouring rows that touches [west, east].
        for row in (y - 1, y + 1):
            if row < 0 or row >= height:
                continue
            row_starts, row_ends = runs[row]
            first = int(np.searchsorted(row_ends, west))
            last = int(np.searchsorted(row_starts, east, side="right"))
            for neighbour in range(first, last):
                if mask[row, row_starts[neighbour]]:
                    queue.append((row, neighbour))
    return consumed


def _span_pixels(spans: List[Tuple[int, int, int]]) -> np.ndarray:
    if not spans:
        return np.empty((0, 2), dtype=np.int64)
    ys, wests, easts = (np.asarray(column, dtype=np.int64) for column in zip(*spans))
    lengths = easts - wests + 1
    offsets = np.cumsum(lengths) - lengths
    xs = np.arange(int(lengths.sum()), dtype=np.int64) - np.repeat(offsets - wests, lengths)
    return np.column_stack((xs, np.repeat(ys, lengths)))


def extract_components(mask: np.ndarray, min_pixel_count: int = 10) -> List[Segment]:
    """Return the segments with more than ``min_pixel_count`` pixels.

    ``mask`` is consumed: every foreground pixel reached is cleared, including
    those of regions dropped as noise, so a second call returns nothing.
    Segments come back in row-major discovery order and share one flat
    coordinate arena.
    """

    if mask.ndim != 2:
        raise ValueError(f"Expected a 2-D mask, got shape {mask.shape}")
    if mask.dtype != np.bool_:
        raise ValueError(f"Expected a boolean mask, got dtype {mask.dtype}")

    runs = _row_runs(mask)
    spans: List[Tuple[int, int, int]] = []
    bounds: List[Tuple[int, int]] = []
    pixel_total = 0
    discarded = 0
    for y, (starts, _) in enumerate(runs):
        for index, x in enumerate(starts.tolist()):
            if not mask[y, x]:
                continue
            first_span = len(spans)
            count = _flood(mask, runs, y, index, spans)
            if count > min_pixel_count:
                bounds.append((pixel_total, pixel_total + count))
                pixel_total += count
            else:
                del spans[first_span:]
                discarded += 1

    arena = _span_pixels(spans)
    segments = [Segment.from_pixels(arena[start:stop]) for start, stop in bounds]
    logger.debug("Extracted %d segment(s), dropped %d noise region(s)", len(segments), discarded)
    return segments


class ComponentExtractor:
    def __init__(self, config: ExtractionConfig) -> None:
        self.config = config

    def extract(self, mask: np.ndarray) -> List[Segment]:
        return extract_components(mask, min_pixel_count=int(self.config.min_pixel_count))
