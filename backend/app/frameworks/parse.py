"""
parse.py
- Purpose: Grid -> ParsedCompetencyFramework.
- Flow: find header -> classify (or infer when headerless) -> extractor.
- Design: Pure; raises FrameworkParseError subclasses. Persistence is the
  sync service's job.
"""

from __future__ import annotations

import logging
from typing import Sequence

from app.constants.statuses import FormatDetection
from app.frameworks.classify import detect_sheet_format, infer_sheet_format
from app.frameworks.errors import EmptySheetError
from app.frameworks.extractors.registry import get_extractor
from app.frameworks.header import find_header_row, first_data_row
from app.frameworks.levels import get_level_scale
from app.frameworks.rows import is_empty_row
from app.schemas.framework_schema import ParsedCompetencyFramework, SheetMetadata
from app.sheets.types import Row

logger = logging.getLogger("app.frameworks.parse")


def parse_grid(rows: Sequence[Row], metadata: SheetMetadata) -> ParsedCompetencyFramework:
    if not rows or all(is_empty_row(r) for r in rows):
        raise EmptySheetError("Sheet is empty")

    header = find_header_row(rows)
    if header is not None:
        format_type = detect_sheet_format(header.row)
        detection = FormatDetection.HEADER
    else:
        first = first_data_row(rows)
        format_type = infer_sheet_format(first[1] if first else None)
        detection = FormatDetection.INFERRED
        logger.warning(
            "framework.format_inferred",
            extra={"sheet_id": metadata.sheet_id, "format_type": format_type.value},
        )

    cores = get_extractor(format_type)(rows, format_type, header)
    scale = get_level_scale(format_type)

    framework = ParsedCompetencyFramework(
        metadata=metadata,
        format_type=format_type,
        level_names=list(scale.names),
        min_level=scale.min_level,
        max_level=scale.max_level,
        core_competencies=cores,
        format_detection=detection,
        header_row_index=header.index if header else None,
    )
    logger.info(
        "framework.parsed",
        extra={
            "sheet_id": metadata.sheet_id,
            "format_type": format_type.value,
            "format_detection": detection.value,
            "core_competencies": len(cores),
            "records": framework.record_count,
        },
    )
    return framework
