from __future__ import annotations

import io
import logging
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Tuple

from openpyxl import load_workbook

from .aggregation import CombinedRow, merge_rows
from .config import ReviewFormsConfig
from .exceptions import InvalidUploadError
from .extraction import ImportedRow, extract_scores


logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    files: List[ImportedRow] = field(default_factory=list)
    rows: List[CombinedRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "rows": [asdict(row) for row in self.rows],
            "files": [asdict(row) for row in self.files],
        }


def validate_upload_names(names: Iterable[str]) -> None:
    names = list(names)
    if not names:
        raise InvalidUploadError("Missing files")
    if any(not (name or "").lower().endswith(".xlsx") for name in names):
        raise InvalidUploadError("All files must be .xlsx")


def import_scores(uploads: Iterable[Tuple[str, bytes]], cfg: ReviewFormsConfig | None = None) -> ImportResult:
    """Extract every completed form and merge the rows per employee.

    ``uploads`` is a sequence of ``(file_name, content)`` pairs; their order
    decides which file wins when two carry a score for the same role.
    """
    cfg = cfg or ReviewFormsConfig()
    uploads = list(uploads)
    validate_upload_names(name for name, _ in uploads)

    result = ImportResult()
    for name, content in uploads:
        wb = load_workbook(io.BytesIO(content), data_only=True)
        if not wb.worksheets:
            logger.warning("Skipping %s: workbook has no worksheets", name)
            continue
        row = extract_scores(wb, name, cfg.importer)
        logger.info("Imported %s: %s, %d score cells", name, row.completed_by, row.score_count)
        result.files.append(row)

    result.rows = merge_rows(result.files)
    return result
