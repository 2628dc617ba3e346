from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet


@dataclass
class LayoutConfig:
    grid_rows: int = 600
    grid_cols: int = 26
    column_widths: Dict[str, float] = field(
        default_factory=lambda: {
            "A": 3,
            "B": 50,
            "C": 70,
            "D": 16,
            "E": 3,
            "F": 40,
            "G": 40,
        }
    )
    title_row_height: float = 50


@dataclass
class GeneratorConfig:
    soft_skills_sheet: str = "Soft Skills KPI"
    excluded_sheets: FrozenSet[str] = frozenset({"Dashboard", "Soft Skills KPI"})
    max_title_length: int = 31
    archive_name: str = "generated_forms.zip"
    write_metadata_sheet: bool = True


@dataclass
class ImportConfig:
    marker_color_suffix: str = "FFFF00"
    min_score: float = 1.0
    max_score: float = 5.0
    use_metadata_sheet: bool = True


@dataclass
class ReviewFormsConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    importer: ImportConfig = field(default_factory=ImportConfig)


def load_config_override(config_path: str | Path, current_cfg: ReviewFormsConfig) -> ReviewFormsConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    payload = json.loads(path.read_text(encoding="utf-8"))

    if "layout" in payload:
        for key, value in payload["layout"].items():
            setattr(current_cfg.layout, key, value)

    if "generator" in payload:
        for key, value in payload["generator"].items():
            if key == "excluded_sheets":
                value = frozenset(value)
            setattr(current_cfg.generator, key, value)

    if "importer" in payload:
        for key, value in payload["importer"].items():
            setattr(current_cfg.importer, key, value)

    return current_cfg
