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

"""Synthetic display builders shared by the test suite."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pytest

from sevenseg.segmentation import Segment

# Stroke rectangles (x1, y1, x2, y2), inclusive, relative to the digit origin.
STROKES: Dict[str, Tuple[int, int, int, int]] = {
    "a": (6, 0, 25, 3),
    "b": (28, 6, 31, 25),
    "c": (28, 36, 31, 55),
    "d": (6, 60, 25, 63),
    "e": (0, 36, 3, 55),
    "f": (0, 6, 3, 25),
    "g": (6, 30, 25, 33),
}

DIGIT_STROKES: Dict[str, str] = {
    "0": "abcdef",
    "1": "bc",
    "2": "abged",
    "3": "abgcd",
    "4": "fgbc",
    "5": "afgcd",
    "6": "afgedc",
    "7": "abc",
    "8": "abcdefg",
    "9": "abcfg",
}

CELL_WIDTH = 60
CELL_HEIGHT = 100
DIGIT_OFFSET = (14, 18)


def draw_digit(canvas: np.ndarray, digit: str, origin_x: int, origin_y: int) -> None:
    for name in DIGIT_STROKES[digit]:
        x1, y1, x2, y2 = STROKES[name]
        canvas[origin_y + y1 : origin_y + y2 + 1, origin_x + x1 : origin_x + x2 + 1] = True


def render_lit(digits: str, rows: int = 4, columns: int = 4) -> np.ndarray:
    """Return a ``(height, width)`` bool array with one digit per grid cell.

    A space leaves the cell blank.
    """

    lit = np.zeros((rows * CELL_HEIGHT, columns * CELL_WIDTH), dtype=bool)
    for index, digit in enumerate(digits):
        if digit == " ":
            continue
        row, col = divmod(index, columns)
        draw_digit(lit, digit, col * CELL_WIDTH + DIGIT_OFFSET[0], row * CELL_HEIGHT + DIGIT_OFFSET[1])
    return lit


def to_bgra(lit: np.ndarray, lighter: bool = True) -> np.ndarray:
    """Paint lit pixels white on black (or black on white when ``lighter`` is off)."""

    height, width = lit.shape
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    on = lit if lighter else ~lit
    pixels[on, :3] = 255
    return pixels


def stroke_segment(x1: int, y1: int, x2: int, y2: int) -> Segment:
    xs, ys = np.meshgrid(np.arange(x1, x2 + 1), np.arange(y1, y2 + 1))
    return Segment.from_pixels(np.column_stack((xs.ravel(), ys.ravel())).astype(np.int64))


def digit_segments(digit: str, origin: Tuple[int, int] = (0, 0), order: Optional[Iterable[str]] = None) -> List[Segment]:
    names = list(order) if order is not None else sorted(DIGIT_STROKES[digit], key=lambda n: (STROKES[n][1], STROKES[n][0]))
    segments = []
    for name in names:
        x1, y1, x2, y2 = STROKES[name]
        segments.append(stroke_segment(origin[0] + x1, origin[1] + y1, origin[0] + x2, origin[1] + y2))
    return segments


@pytest.fixture
def display() -> Callable[..., Tuple[np.ndarray, int, int]]:
    def _build(digits: str, rows: int = 4, columns: int = 4, lighter: bool = True) -> Tuple[np.ndarray, int, int]:
        lit = render_lit(digits, rows, columns)
        height, width = lit.shape
        return to_bgra(lit, lighter), width, height

    return _build


@pytest.fixture
def stroke() -> Callable[[int, int, int, int], Segment]:
    return stroke_segment


@pytest.fixture
def digit_strokes() -> Callable[..., List[Segment]]:
    return digit_segments
