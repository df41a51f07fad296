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

"""Read the digits of a seven-segment display from one or more photographs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from sevenseg import PipelineResult, SevenSegmentPipeline, load_config_overrides_from_file, load_ocr_config
from sevenseg.io_utils import collect_panel_photos, load_panel_photo, output_paths, save_overlay, write_reading
from sevenseg.overlay import render_overlay


def read_displays(
    input_path: Union[str, Path],
    config: Optional[Mapping[str, object]] = None,
) -> Dict[str, PipelineResult]:
    """
    Run the display reader over every image under ``input_path``.

    Each recognised sequence is written to ``<output_root>/<image stem>.txt``.
    When a debug directory is configured, an overlay of the segments coloured
    by cluster is saved next to it as ``<image stem>_overlay.png``.

    Args:
        input_path: Image file or directory containing images
        config: Optional configuration dictionary to override defaults

    Returns:
        Dictionary mapping image names to pipeline results

    Example:
        >>> results = read_displays("samples/panel.jpg")
        >>> results["panel.jpg"].text
        '8888888888888888'
    """
    overrides = dict(config or {})
    ocr_cfg = load_ocr_config(overrides, base_path=Path.cwd())
    pipeline = SevenSegmentPipeline(ocr_cfg)
    results: Dict[str, PipelineResult] = {}

    for photo in collect_panel_photos(Path(input_path)):
        image = load_panel_photo(photo)
        result = pipeline.run_image(image)
        text_path, overlay_path = output_paths(ocr_cfg.output_root, photo, ocr_cfg.debug_dir)
        write_reading(text_path, result.text)
        if overlay_path is not None:
            save_overlay(overlay_path, render_overlay(image, result))
        results[photo.name] = result

    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Read seven-segment display digits")
    parser.add_argument("input", type=str, help="Directory or image path for processing")
    parser.add_argument("--config", type=str, default=None, help="Optional config overrides file")
    parser.add_argument("--debug", action="store_true", help="Save cluster overlays under <output_root>/debug")
    parser.add_argument("--verbose", action="store_true", help="Log per-stage timings and clustering progress")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    overrides: Dict[str, object] = {}
    if args.config:
        try:
            overrides = load_config_overrides_from_file(args.config)
        except FileNotFoundError:
            print(f"Config overrides not found: {args.config}")
        except Exception as exc:
            print(f"Failed to parse overrides {args.config}: {exc}")
    if args.debug:
        overrides.setdefault("debug_dir", "debug")

    summary = read_displays(args.input, overrides)
    for name, result in summary.items():
        status = "" if result.reliable else f" (unreliable: {result.clustering.status.value})"
        print(f"{name}: \"{result.text}\"{status}")
