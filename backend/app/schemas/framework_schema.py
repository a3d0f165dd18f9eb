"""
framework_schema.py
- Purpose: Normalized competency framework, independent of the sheet layout.
- Design: Every extractor converges on these models; the sync service maps
  them onto ORM rows. Lives in memory for one sync run only.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from app.constants.statuses import FormatDetection, FrameworkType, SheetFormatType


class SheetMetadata(BaseModel):
    type: FrameworkType
    name: str
    department: Optional[str] = None
    sheet_url: str
    sheet_id: str
    tab_name: Optional[str] = None  # tab title or numeric gid


class ParsedLevel(BaseModel):
    level: int
    name: str
    description: str


class ParsedBehavioralIndicator(BaseModel):
    level: int
    level_name: str
    indicators: List[str] = Field(default_factory=list)


class ParsedSubCompetency(BaseModel):
    name: str
    description: Optional[str] = None
    levels: List[ParsedLevel] = Field(default_factory=list)
    has_behavioral_indicators: bool = False
    behavioral_indicators: Optional[List[ParsedBehavioralIndicator]] = None


class ParsedCoreCompetency(BaseModel):
    name: str
    description: Optional[str] = None
    function_area: Optional[str] = None
    category: Optional[str] = None
    sub_competencies: List[ParsedSubCompetency] = Field(default_factory=list)


class ParsedCompetencyFramework(BaseModel):
    metadata: SheetMetadata
    format_type: SheetFormatType
    level_names: List[str]
    min_level: int
    max_level: int
    core_competencies: List[ParsedCoreCompetency] = Field(default_factory=list)

    format_detection: FormatDetection = FormatDetection.HEADER
    header_row_index: Optional[int] = None

    @property
    def record_count(self) -> int:
        """Core + sub rows this framework persists as."""
        return sum(1 + len(c.sub_competencies) for c in self.core_competencies)
