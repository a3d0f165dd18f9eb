"""
models package
- Purpose: Import all ORM models so Alembic autogenerate discovers them.
- Important: Alembic only sees models that are imported somewhere.
"""

from app.models.source import CompetencyFrameworkSource
from app.models.core_competency import CoreCompetency
from app.models.sub_competency import SubCompetency
from app.models.sync_log import CompetencySyncLog

__all__ = [
    "CompetencyFrameworkSource",
    "CoreCompetency",
    "SubCompetency",
    "CompetencySyncLog",
]
