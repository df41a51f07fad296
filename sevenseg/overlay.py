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

"""Debug rendering of extracted segments and their clusters."""

from __future__ import annotations

from typing import Tuple

import cv2 as cv
import numpy as np

from .pipeline import PipelineResult


def _cluster_colour(index: int, cluster_count: int) -> Tuple[int, int, int]:
    if index < 0:
        return (128, 128, 128)
    hue = int(180 * index / max(1, cluster_count))
    swatch = np.uint8([[[hue, 220, 255]]])
    b, g, r = cv.cvtColor(swatch, cv.COLOR_HSV2BGR)[0, 0]
    return int(b), int(g), int(r)


def render_overlay(image: np.ndarray, result: PipelineResult) -> np.ndarray:
    """Return a BGR copy of ``image`` with segments painted by cluster.

    Each segment gets its bounding box, and each cluster its final centroid and
    the character it was read as.
    """

    if image.ndim == 2:
        vis = cv.cvtColor(image, cv.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        vis = cv.cvtColor(image, cv.COLOR_BGRA2BGR)
    else:
        vis = image.copy()

    cluster_count = result.clustering.cluster_count
    for segment in result.segments:
        colour = _cluster_colour(segment.cluster, cluster_count)
        xs = segment.pixels[:, 0]
        ys = segment.pixels[:, 1]
        vis[ys, xs] = colour
        box = segment.box
        cv.rectangle(vis, (box.x1, box.y1), (box.x2, box.y2), colour, 1)

    for index, (cx, cy) in enumerate(result.clustering.centroids.tolist()):
        colour = _cluster_colour(index, cluster_count)
        cv.drawMarker(vis, (int(cx), int(cy)), colour, cv.MARKER_CROSS, 8, 1)
        if index < len(result.characters):
            label = result.characters[index] if len(result.characters[index]) == 1 else "?"
            cv.putText(vis, f"{index}:{label}", (int(cx) + 4, int(cy) - 4), cv.FONT_HERSHEY_SIMPLEX, 0.4, colour, 1)
    return vis
