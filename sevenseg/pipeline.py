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

"""High-level pipeline orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from .clustering import ClusteringResult, SegmentClusterer, group_by_cluster
from .config import OCRConfig
from .io_utils import image_to_bgra
from .recognition import DigitClassifier, Prediction
from .segmentation import ComponentExtractor, Segment, Thresholder
from .segmentation.threshold import PixelBuffer
from .utils import StageTimer

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    characters: List[str]
    segments: List[Segment]
    clustering: ClusteringResult
    predictions: List[Prediction]
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "".join(self.characters)

    @property
    def reliable(self) -> bool:
        """``False`` when clustering stopped before converging."""

        return self.clustering.converged


class SevenSegmentPipeline:
    def __init__(self, config: OCRConfig) -> None:
        self.config = config.validate()
        self.thresholder = Thresholder(config.threshold)
        self.extractor = ComponentExtractor(config.extraction)
        self.clusterer = SegmentClusterer(config.clustering)
        self.classifier = DigitClassifier(config.recognition)

    def run(self, buffer: PixelBuffer, width: int, height: int) -> PipelineResult:
        timer = StageTimer()
        mask = self.thresholder.apply(buffer, width, height)
        timer.lap("threshold")
        segments = self.extractor.extract(mask)
        timer.lap("components")
        clustering = self.clusterer.cluster(segments, width, height)
        timer.lap("clustering")
        groups = group_by_cluster(segments, int(self.config.clustering.digit_count))
        predictions = self.classifier.classify_groups(groups)
        timer.lap("classification")
        timer.total()

        characters = [prediction.character for prediction in predictions]
        for index, prediction in enumerate(predictions):
            logger.debug("Cluster %d: %d segment(s) -> %s", index, prediction.segment_count, prediction.character)
        logger.debug(
            "Stage timings (ms): %s",
            ", ".join(f"{stage}={elapsed:.1f}" for stage, elapsed in timer.timings.items()),
        )

        result = PipelineResult(
            characters=characters,
            segments=segments,
            clustering=clustering,
            predictions=predictions,
            timings=dict(timer.timings),
        )
        if not result.reliable:
            logger.warning(
                "Clustering finished as %s after %d iteration(s); result may be unreliable",
                clustering.status.value,
                clustering.iterations,
            )
        return result

    def run_image(self, image: np.ndarray) -> PipelineResult:
        """Run on an OpenCV image (BGR, BGRA or single-channel)."""

        height, width = image.shape[:2]
        return self.run(image_to_bgra(image), width, height)
