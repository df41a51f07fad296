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

"""Rule-based identification of a digit from its lit strokes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..config import UNRECOGNIZED_MARKER, RecognitionConfig
from ..segmentation import Segment


# Digits decided by the stroke count alone.
_DIGIT_BY_COUNT: Dict[int, str] = {
    2: "1",
    3: "7",
    4: "4",
    7: "8",
}


@dataclass(slots=True)
class Prediction:
    character: str
    segment_count: int
    recognized: bool


def _identify_five(segments: Sequence[Segment], unrecognized: str) -> str:
    vertical: List[Segment] = []
    horizontal: List[Segment] = []
    for segment in segments:
        if segment.is_vertical:
            vertical.append(segment)
        else:
            horizontal.append(segment)

    if len(vertical) == 3:
        return "9"
    if len(vertical) < 2:
        return unrecognized

    # The last horizontal bar found is the reference; without one every stroke lies right of x = 0.
    reference_x = horizontal[-1].centroid_x if horizontal else 0
    right_side = sum(1 for segment in vertical if segment.centroid_x > reference_x)
    if right_side == 2:
        return "3"

    first, second = vertical[0], vertical[1]
    if (first.centroid_x > second.centroid_x and first.centroid_y > second.centroid_y) or (
        first.centroid_x < second.centroid_x and first.centroid_y < second.centroid_y
    ):
        # Upper-left and lower-right strokes.
        return "5"
    return "2"


def _identify_six(segments: Sequence[Segment]) -> str:
    vertical_count = sum(1 for segment in segments if segment.is_vertical)
    if vertical_count == 4:
        return "0"
    return "6"


def identify_digit(segments: Sequence[Segment], unrecognized: str = UNRECOGNIZED_MARKER) -> str:
    """Return the digit drawn by ``segments`` or ``unrecognized``.

    The rules expect the strokes of one canonical seven-segment digit, where a
    stroke is vertical when its bounding box is taller than it is wide.
    """

    count = len(segments)
    if count in _DIGIT_BY_COUNT:
        return _DIGIT_BY_COUNT[count]
    if count == 5:
        return _identify_five(segments, unrecognized)
    if count == 6:
        return _identify_six(segments)
    return unrecognized


class DigitClassifier:
    def __init__(self, config: RecognitionConfig) -> None:
        self.config = config

    @property
    def unrecognized_marker(self) -> str:
        return self.config.unrecognized_marker

    def classify(self, segments: Sequence[Segment]) -> Prediction:
        character = identify_digit(segments, self.unrecognized_marker)
        return Prediction(
            character=character,
            segment_count=len(segments),
            recognized=character != self.unrecognized_marker,
        )

    def classify_groups(self, groups: Sequence[Sequence[Segment]]) -> List[Prediction]:
        return [self.classify(group) for group in groups]
