from __future__ import annotations

import math
import re
from typing import Iterable


ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
ILLEGAL_TITLE_CHARS = re.compile(r"[\\/*?:\[\]]")
WHITESPACE = re.compile(r"\s+")


def cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    # CellRichText renders its plain text through str()
    return str(value)


def is_blank_row(values: Iterable) -> bool:
    return all(cell_text(v).strip() == "" for v in values)


def normalize_name(value) -> str:
    return WHITESPACE.sub(" ", cell_text(value).strip()).casefold()


def safe_filename(name: str) -> str:
    cleaned = ILLEGAL_FILENAME_CHARS.sub("_", name or "").strip()
    return cleaned or "Sheet"


def fit_sheet_title(title: str, max_length: int = 31) -> str:
    cleaned = ILLEGAL_TITLE_CHARS.sub("_", (title or "").strip())
    return cleaned[:max_length] if cleaned else "Sheet"


def parse_score(value) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None
