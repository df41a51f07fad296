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

"""Reading panel photographs and writing recognised text and overlays."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple

import cv2 as cv
import numpy as np


PHOTO_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"})


def collect_panel_photos(path: Path) -> List[Path]:
    """Return the display photographs under ``path`` in capture order.

    A single file is returned as is. In a directory, files are matched on their
    suffix regardless of case and ordered by the last number in their name, so
    ``panel2.png`` comes before ``panel10.png``.
    """

    if path.is_file():
        return [path]
    if not path.exists():
        raise FileNotFoundError(f"Input path does not exist: {path}")
    photos = [p for p in path.iterdir() if p.is_file() and p.suffix.lower() in PHOTO_SUFFIXES]
    photos.sort(key=lambda p: (_capture_index(p.stem), p.stem))
    return photos


def _capture_index(stem: str) -> int:
    numbers = re.findall(r"\d+", stem)
    return int(numbers[-1]) if numbers else 0


def load_panel_photo(path: Path) -> np.ndarray:
    image = cv.imread(str(path), cv.IMREAD_COLOR)
    if image is None:
        raise FileNotFoundError(f"Failed to load panel photo: {path}")
    return image


def image_to_bgra(image: np.ndarray) -> np.ndarray:
    """Convert an OpenCV image into the contiguous BGRA layout the reader consumes."""

    if image.dtype != np.uint8:
        raise ValueError(f"Expected an 8-bit image, got dtype {image.dtype}")
    if image.ndim == 2:
        converted = cv.cvtColor(image, cv.COLOR_GRAY2BGRA)
    elif image.ndim == 3 and image.shape[2] == 3:
        converted = cv.cvtColor(image, cv.COLOR_BGR2BGRA)
    elif image.ndim == 3 and image.shape[2] == 4:
        converted = image
    else:
        raise ValueError(f"Unsupported image shape: {image.shape}")
    return np.ascontiguousarray(converted)


def output_paths(output_dir: Path, photo: Path, debug_dir: Optional[Path] = None) -> Tuple[Path, Optional[Path]]:
    """Return where the reading and, with a debug directory, the overlay of ``photo`` go."""

    overlay = debug_dir / f"{photo.stem}_overlay.png" if debug_dir is not None else None
    return output_dir / f"{photo.stem}.txt", overlay


def write_reading(path: Path, text: str) -> None:
    """Write one recognised sequence as a single UTF-8 line."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")


def save_overlay(path: Path, overlay: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv.imwrite(str(path), overlay):
        raise RuntimeError(f"Failed to save overlay: {path}")
