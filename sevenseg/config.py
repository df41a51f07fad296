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

"""Configuration helpers for the display reader."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union


UNRECOGNIZED_MARKER = "failed to ID digit"


class ConfigurationError(ValueError):
    """Raised when the reader is configured with an impossible layout."""


def _strip_inline_comment(value: str) -> str:
    if "#" not in value:
        return value.strip()
    return value.split("#", 1)[0].strip()


def _parse_override_value(value: str, key: str = "") -> object:
    text = _strip_inline_comment(value)
    if not text:
        return ""
    if "marker" in key.lower():
        return text
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        if any(sep in text for sep in (".", "e", "E")):
            return float(text)
        return int(text)
    except ValueError:
        return text


def load_config_overrides_from_file(path: Union[str, Path], *, allow_missing: bool = False) -> Dict[str, object]:
    """Parse a minimal ``key: value`` override file (no JSON required)."""

    file_path = Path(path)
    if not file_path.exists():
        if allow_missing:
            return {}
        raise FileNotFoundError(f"Config file not found: {file_path}")

    overrides: Dict[str, object] = {}
    with file_path.open("r", encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if ":" not in line:
                continue
            key, value = line.split(":", 1)
            key = key.strip()
            overrides[key] = _parse_override_value(value, key)
    return overrides


@dataclass
class ThresholdConfig:
    threshold: float = 150.0
    digits_are_lighter: bool = True


@dataclass
class ExtractionConfig:
    min_pixel_count: int = 10


@dataclass
class ClusteringConfig:
    digit_count: int = 16
    num_rows: int = 4
    num_columns: int = 4
    max_iterations: int = 100
    reorder_by_position: bool = False


@dataclass
class RecognitionConfig:
    unrecognized_marker: str = UNRECOGNIZED_MARKER


@dataclass
class OCRConfig:
    output_root: Path = Path("output")
    debug_dirname: Optional[str] = None
    threshold: ThresholdConfig = field(default_factory=ThresholdConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    recognition: RecognitionConfig = field(default_factory=RecognitionConfig)

    @property
    def debug_dir(self) -> Optional[Path]:
        if not self.debug_dirname:
            return None
        return self.output_root / self.debug_dirname

    def validate(self) -> "OCRConfig":
        """Fail fast on settings that would leave clustering undefined."""

        clustering = self.clustering
        if clustering.num_rows <= 0 or clustering.num_columns <= 0:
            raise ConfigurationError(
                f"Grid shape must be positive, got {clustering.num_rows}x{clustering.num_columns}"
            )
        if clustering.digit_count <= 0:
            raise ConfigurationError(f"Digit count must be positive, got {clustering.digit_count}")
        if clustering.digit_count != clustering.num_rows * clustering.num_columns:
            raise ConfigurationError(
                f"Digit count {clustering.digit_count} does not match a "
                f"{clustering.num_rows}x{clustering.num_columns} grid"
            )
        if clustering.max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive, got {clustering.max_iterations}")
        if self.extraction.min_pixel_count < 0:
            raise ConfigurationError(f"min_pixel_count must not be negative, got {self.extraction.min_pixel_count}")
        if not 0.0 <= self.threshold.threshold <= 255.0:
            raise ConfigurationError(f"threshold must lie in [0, 255], got {self.threshold.threshold}")
        return self


def _pop_first(keys: Iterable[str], source: Dict[str, object], default: object) -> Any:
    for key in keys:
        if key in source:
            return source.pop(key)
    return default


def _ensure_path(value: object, base_path: Path) -> Path:
    path = Path(str(value))
    if not path.is_absolute():
        path = base_path / path
    return path


def _ensure_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def load_ocr_config(config_dict: Optional[Dict[str, object]], base_path: Optional[Path] = None) -> OCRConfig:
    data = dict(config_dict or {})
    base = Path(base_path or Path.cwd())

    output_root = _ensure_path(_pop_first(["output_root", "output_dir"], data, "output"), base)
    debug_value = _pop_first(["debug_dir", "debug_dirname"], data, None)

    threshold = ThresholdConfig(
        threshold=float(_pop_first(["threshold", "gray_threshold"], data, 150.0)),
        digits_are_lighter=_ensure_bool(_pop_first(["digits_are_lighter", "digitsAreLighter"], data, True)),
    )

    extraction = ExtractionConfig(
        min_pixel_count=int(_pop_first(["min_pixel_count", "min_pixels", "minPixelCount"], data, 10)),
    )

    clustering = ClusteringConfig(
        digit_count=int(_pop_first(["k", "digit_count"], data, 16)),
        num_rows=int(_pop_first(["num_rows", "rows", "numRows"], data, 4)),
        num_columns=int(_pop_first(["num_columns", "columns", "numColumns"], data, 4)),
        max_iterations=int(_pop_first(["max_iterations"], data, 100)),
        reorder_by_position=_ensure_bool(_pop_first(["reorder_by_position", "reading_order"], data, False)),
    )

    recognition = RecognitionConfig(
        unrecognized_marker=str(_pop_first(["unrecognized_marker"], data, UNRECOGNIZED_MARKER)),
    )

    return OCRConfig(
        output_root=output_root,
        debug_dirname=str(debug_value) if debug_value else None,
        threshold=threshold,
        extraction=extraction,
        clustering=clustering,
        recognition=recognition,
    )
