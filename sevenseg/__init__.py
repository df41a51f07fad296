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

"""Seven-segment display reading from photographed images."""

from .config import (
    UNRECOGNIZED_MARKER,
    ClusteringConfig,
    ConfigurationError,
    ExtractionConfig,
    OCRConfig,
    RecognitionConfig,
    ThresholdConfig,
    load_config_overrides_from_file,
    load_ocr_config,
)
from .clustering import ClusteringResult, ClusterStatus
from .pipeline import PipelineResult, SevenSegmentPipeline

__all__ = [
    "UNRECOGNIZED_MARKER",
    "ClusteringConfig",
    "ConfigurationError",
    "ExtractionConfig",
    "OCRConfig",
    "RecognitionConfig",
    "ThresholdConfig",
    "load_config_overrides_from_file",
    "load_ocr_config",
    "ClusteringResult",
    "ClusterStatus",
    "PipelineResult",
    "SevenSegmentPipeline",
]
