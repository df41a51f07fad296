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

"""Grayscale thresholding of raw BGRA pixel buffers."""

from __future__ import annotations

from typing import Union

import numpy as np

from ..config import ThresholdConfig

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray]

BYTES_PER_PIXEL = 4

# Luma weights applied to channels normalised to [0, 1].
_RED_WEIGHT = 0.21
_GREEN_WEIGHT = 0.71
_BLUE_WEIGHT = 0.07


def as_bgra_array(buffer: PixelBuffer, width: int, height: int) -> np.ndarray:
    """View ``buffer`` as a ``(height, width, 4)`` uint8 array in BGRA order."""

    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if isinstance(buffer, np.ndarray):
        flat = np.ascontiguousarray(buffer, dtype=np.uint8).reshape(-1)
    else:
        flat = np.frombuffer(buffer, dtype=np.uint8)
    expected = BYTES_PER_PIXEL * width * height
    if flat.size != expected:
        raise ValueError(
            f"Pixel buffer holds {flat.size} bytes, expected {expected} for a {width}x{height} BGRA image"
        )
    return flat.reshape(height, width, BYTES_PER_PIXEL)


def luma(pixels: np.ndarray) -> np.ndarray:
    """Return the grayscale value (0-255 scale) of each BGRA pixel."""

    channels = pixels[..., :3].astype(np.float64) / 255.0
    blue = channels[..., 0]
    green = channels[..., 1]
    red = channels[..., 2]
    return (_RED_WEIGHT * red + _GREEN_WEIGHT * green + _BLUE_WEIGHT * blue) * 255.0


def threshold_buffer(
    buffer: PixelBuffer,
    width: int,
    height: int,
    threshold: float = 150.0,
    digits_are_lighter: bool = True,
) -> np.ndarray:
    """Binarise a BGRA buffer into a ``(height, width)`` mask of digit pixels.

    Pixels darker than ``threshold`` are foreground when the digits are dark;
    ``digits_are_lighter`` flips that sense so the mask always marks the digits.
    """

    pixels = as_bgra_array(buffer, width, height)
    dark = luma(pixels) < threshold
    if digits_are_lighter:
        return ~dark
    return dark


class Thresholder:
    def __init__(self, config: ThresholdConfig) -> None:
        self.config = config

    def apply(self, buffer: PixelBuffer, width: int, height: int) -> np.ndarray:
        return threshold_buffer(
            buffer,
            width,
            height,
            threshold=float(self.config.threshold),
            digits_are_lighter=bool(self.config.digits_are_lighter),
        )
