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

"""General-purpose utilities."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel extent: ``x2``/``y2`` are the last covered column/row."""

    x1: int
    y1: int
    x2: int
    y2: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x1, self.y1, self.x2, self.y2

    @property
    def width(self) -> int:
        return max(0, self.x2 - self.x1)

    @property
    def height(self) -> int:
        return max(0, self.y2 - self.y1)

    @classmethod
    def from_points(cls, points: np.ndarray) -> "BoundingBox":
        """Return the extent of an ``(n, 2)`` array of ``(x, y)`` points."""

        mins = points.min(axis=0)
        maxs = points.max(axis=0)
        return cls(int(mins[0]), int(mins[1]), int(maxs[0]), int(maxs[1]))


class StageTimer:
    """Collect wall-clock latency (milliseconds) for named pipeline stages."""

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._last = self._start
        self.timings: Dict[str, float] = {}

    def lap(self, stage: str) -> float:
        now = time.perf_counter()
        elapsed = (now - self._last) * 1000.0
        self.timings[stage] = elapsed
        self._last = now
        return elapsed

    def total(self) -> float:
        elapsed = (time.perf_counter() - self._start) * 1000.0
        self.timings["total"] = elapsed
        return elapsed
