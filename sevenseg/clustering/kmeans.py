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

"""Grid-seeded k-means grouping of segments into digit positions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

import numpy as np

from ..config import ClusteringConfig
from ..segmentation import UNASSIGNED, Segment

logger = logging.getLogger(__name__)


class ClusterStatus(str, Enum):
    CONVERGED = "converged"
    ABORTED_EMPTY_CLUSTER = "aborted_empty_cluster"
    ITERATION_LIMIT = "iteration_limit"


@dataclass
class ClusteringResult:
    labels: np.ndarray  # one cluster index per segment
    centroids: np.ndarray  # (k, 2) integer x, y
    status: ClusterStatus
    iterations: int

    @property
    def converged(self) -> bool:
        return self.status is ClusterStatus.CONVERGED

    @property
    def cluster_count(self) -> int:
        return int(self.centroids.shape[0])

    def members(self, index: int) -> np.ndarray:
        """Return the segment indices assigned to cluster ``index``."""

        return np.flatnonzero(self.labels == index)


def grid_seeds(width: int, height: int, rows: int, columns: int) -> np.ndarray:
    """Place one seed at the centre of every cell of a ``rows x columns`` grid.

    Seed ``col + columns * row`` belongs to grid cell ``(col, row)``.
    """

    seeds = np.empty((rows * columns, 2), dtype=np.int64)
    for row in range(rows):
        for col in range(columns):
            seeds[col + columns * row] = (
                width // (2 * columns) + col * width // columns,
                height // (2 * rows) + row * height // rows,
            )
    return seeds


def kmeans(points: np.ndarray, seeds: np.ndarray, max_iterations: int = 100) -> ClusteringResult:
    """Lloyd iterations over integer points with squared Euclidean distance.

    Ties go to the lowest cluster index. Iteration stops as soon as a cluster
    loses all its members, leaving the assignment of that iteration in place.
    """

    points = np.asarray(points, dtype=np.int64).reshape(-1, 2)
    centroids = np.array(seeds, dtype=np.int64).reshape(-1, 2)
    k = centroids.shape[0]
    labels = np.full(points.shape[0], UNASSIGNED, dtype=np.int64)

    if points.shape[0] == 0:
        logger.warning("Aborting k-means clustering: no segments to cluster")
        return ClusteringResult(labels, centroids, ClusterStatus.ABORTED_EMPTY_CLUSTER, 0)

    for iteration in range(1, max_iterations + 1):
        deltas = points[:, None, :] - centroids[None, :, :]
        distances = (deltas * deltas).sum(axis=2)
        assigned = distances.argmin(axis=1)
        changed = bool(np.any(assigned != labels))
        labels = assigned

        counts = np.bincount(labels, minlength=k)
        sums = np.zeros((k, 2), dtype=np.int64)
        np.add.at(sums, labels, points)
        populated = counts > 0
        centroids[populated] = sums[populated] // counts[populated][:, None]
        logger.debug("k-means iteration %d: changed=%s populated=%d/%d", iteration, changed, int(populated.sum()), k)

        if not populated.all():
            empty = np.flatnonzero(~populated).tolist()
            logger.warning("Aborting k-means clustering due to empty cluster(s) %s at iteration %d", empty, iteration)
            return ClusteringResult(labels, centroids, ClusterStatus.ABORTED_EMPTY_CLUSTER, iteration)
        if not changed:
            return ClusteringResult(labels, centroids, ClusterStatus.CONVERGED, iteration)

    logger.warning("k-means clustering stopped after %d iterations without converging", max_iterations)
    return ClusteringResult(labels, centroids, ClusterStatus.ITERATION_LIMIT, max_iterations)


def reading_order(centroids: np.ndarray, rows: int, columns: int) -> np.ndarray:
    """Map each cluster index to its top-to-bottom, left-to-right position."""

    by_y = np.argsort(centroids[:, 1], kind="stable")
    mapping = np.empty(rows * columns, dtype=np.int64)
    for row in range(rows):
        band = by_y[row * columns : (row + 1) * columns]
        band = band[np.argsort(centroids[band, 0], kind="stable")]
        for col, old_index in enumerate(band):
            mapping[old_index] = col + columns * row
    return mapping


def relabel(result: ClusteringResult, mapping: np.ndarray) -> ClusteringResult:
    centroids = np.empty_like(result.centroids)
    centroids[mapping] = result.centroids
    labels = mapping[result.labels] if result.labels.size else result.labels.copy()
    return ClusteringResult(labels, centroids, result.status, result.iterations)


class SegmentClusterer:
    """Assign every segment to one of ``rows x columns`` digit positions."""

    def __init__(self, config: ClusteringConfig) -> None:
        self.config = config

    def cluster(self, segments: Sequence[Segment], width: int, height: int) -> ClusteringResult:
        rows = int(self.config.num_rows)
        columns = int(self.config.num_columns)
        seeds = grid_seeds(width, height, rows, columns)
        points = np.array([segment.centroid for segment in segments], dtype=np.int64).reshape(-1, 2)
        result = kmeans(points, seeds, max_iterations=int(self.config.max_iterations))
        if self.config.reorder_by_position:
            result = relabel(result, reading_order(result.centroids, rows, columns))
        for segment, label in zip(segments, result.labels.tolist()):
            segment.cluster = int(label)
        logger.debug("Clustered %d segment(s) into %d position(s): %s", len(segments), rows * columns, result.status.value)
        return result


def group_by_cluster(segments: Sequence[Segment], cluster_count: int) -> List[List[Segment]]:
    """Bucket segments by their cluster index, preserving extraction order."""

    groups: List[List[Segment]] = [[] for _ in range(cluster_count)]
    for segment in segments:
        if 0 <= segment.cluster < cluster_count:
            groups[segment.cluster].append(segment)
    return groups
