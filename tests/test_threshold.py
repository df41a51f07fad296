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

import numpy as np
import pytest

from sevenseg.config import ThresholdConfig
from sevenseg.segmentation import Thresholder, as_bgra_array, luma, threshold_buffer


def _buffer(*pixels):
    """Pack ``(b, g, r)`` triples into a BGRA byte string."""

    return bytes(value for b, g, r in pixels for value in (b, g, r, 255))


def test_checkerboard_light_digits():
    buffer = _buffer((255, 255, 255), (0, 0, 0), (0, 0, 0), (255, 255, 255))
    mask = threshold_buffer(buffer, 2, 2, threshold=150.0, digits_are_lighter=True)
    assert mask.dtype == np.bool_
    assert mask.tolist() == [[True, False], [False, True]]


def test_checkerboard_dark_digits():
    buffer = _buffer((255, 255, 255), (0, 0, 0), (0, 0, 0), (255, 255, 255))
    mask = threshold_buffer(buffer, 2, 2, threshold=150.0, digits_are_lighter=False)
    assert mask.tolist() == [[False, True], [True, False]]


def test_grey_levels_either_side_of_threshold():
    # 0.99 * 149 = 147.51 is dark, 0.99 * 152 = 150.48 is not.
    buffer = _buffer((149, 149, 149), (152, 152, 152), (152, 152, 152), (149, 149, 149))
    mask = threshold_buffer(buffer, 2, 2, digits_are_lighter=False)
    assert mask.tolist() == [[True, False], [False, True]]


def test_channel_weights_follow_bgra_order():
    pixels = np.array([[[0, 0, 255, 255], [0, 255, 0, 255], [255, 0, 0, 255]]], dtype=np.uint8)
    values = luma(pixels)
    assert values[0, 0] == pytest.approx(0.21 * 255)
    assert values[0, 1] == pytest.approx(0.71 * 255)
    assert values[0, 2] == pytest.approx(0.07 * 255)


def test_alpha_is_ignored():
    opaque = threshold_buffer(_buffer((0, 0, 0)), 1, 1)
    transparent = threshold_buffer(bytes([0, 0, 0, 0]), 1, 1)
    assert opaque.tolist() == transparent.tolist() == [[False]]


def test_mask_is_row_major():
    # 3 wide, 2 tall: only the pixel at x=2, y=0 is lit.
    pixels = [(0, 0, 0)] * 6
    pixels[2] = (255, 255, 255)
    mask = threshold_buffer(_buffer(*pixels), 3, 2)
    assert mask.shape == (2, 3)
    assert np.argwhere(mask).tolist() == [[0, 2]]


def test_accepts_numpy_buffers():
    pixels = np.zeros((2, 3, 4), dtype=np.uint8)
    pixels[1, 1, :3] = 255
    mask = Thresholder(ThresholdConfig()).apply(pixels, 3, 2)
    assert mask[1, 1]
    assert mask.sum() == 1


def test_rejects_mismatched_buffer_length():
    with pytest.raises(ValueError):
        threshold_buffer(bytes(4 * 3), 2, 2)


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 2)])
def test_rejects_non_positive_dimensions(width, height):
    with pytest.raises(ValueError):
        as_bgra_array(bytes(4), width, height)
