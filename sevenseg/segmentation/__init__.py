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

"""Mask creation and stroke extraction."""

from .components import UNASSIGNED, ComponentExtractor, Segment, extract_components
from .threshold import Thresholder, as_bgra_array, luma, threshold_buffer

__all__ = [
    "UNASSIGNED",
    "ComponentExtractor",
    "Segment",
    "extract_components",
    "Thresholder",
    "as_bgra_array",
    "luma",
    "threshold_buffer",
]
