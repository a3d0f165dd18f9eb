import os
import tempfile

# Settings and the app engine are built at import time; point them at a
# throwaway database before anything under app/ is imported.
os.environ.setdefault("DATABASE_URL", "sqlite:///" + os.path.join(tempfile.mkdtemp(), "app.db"))
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-pass")

import pytest
from sqlalchemy.orm import sessionmaker

from app.constants.statuses import FrameworkType
from app.core.logging_config import configure_logging
from app.db.base import Base
from app.db.session import make_engine
from app.repos.source.write import SourceWriteRepo
from app.schemas.framework_schema import SheetMetadata
from app.sheets.types import to_rows

STANDARD_HEADER = [
    "Function", "Function Objective", "Core Competency", "Sub Competency",
    "Basic", "Intermediate", "Proficient", "Advanced",
]
STANDARD_ROWS = [
    ["Engineering", "Ship reliable software", "Code Quality", "Testing",
     "Writes unit tests", "Designs test suites", "Owns test strategy", "Sets org standards"],
    ["", "", "", "Reviews",
     "Reads PRs", "Gives useful feedback", "Mentors reviewers", "Shapes review culture"],
    ["", "", "Delivery", "Planning",
     "Estimates own tasks", "Plans sprints", "Plans quarters", "Plans roadmaps"],
    ["Design", "Craft usable products", "Research", "Interviews",
     "Observes sessions", "Runs interviews", "Plans studies", "Leads research practice"],
]

VALUES_HEADER = [
    "Value", "Value Definition", "Competency", "Definition",
    "Basic", "Intermediate", "Proficient", "Advanced", "Expert",
]
VALUES_ROWS = [
    ["Ownership", "We act like owners", "Accountability", "Follows through on commitments",
     "b1", "i1", "p1", "a1", "e1"],
    ["", "", "Initiative", "Acts before being asked",
     "b2", "i2", "p2", "a2", ""],
    ["Candor", "We speak plainly", "Feedback", "Shares honest feedback",
     "b3", "i3", "p3", "a3", "e3"],
]

AI_HEADER = ["Competency", "0. Unacceptable", "1. Basic", "2. Intermediate", "3. Proficient", "4. Advanced"]
AI_ROWS = [
    ["Prompting",
     "• Copies prompts blindly",
     "• Writes clear prompts\n• Iterates on output",
     "☑ Chains prompts\n☐ Adds context",
     "Builds reusable prompt libraries",
     "Teaches prompting to others"],
    ["Tool Selection", "", "Uses approved tools", "", "", ""],
]


class FakeFetcher:
    """Serves canned grids by sheet id and counts calls."""

    has_credentials = False

    def __init__(self):
        self.grids: dict[str, list[list[str]]] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, str | None]] = []

    def fetch_grid(self, sheet_id, tab_name=None):
        self.calls.append((sheet_id, tab_name))
        if sheet_id in self.errors:
            raise self.errors[sheet_id]
        return to_rows(self.grids[sheet_id])


@pytest.fixture(autouse=True)
def app_logging(monkeypatch):
    """Every test runs with the app's INFO logging, whatever ran before it."""
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    configure_logging()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_source(session_factory):
    def _make(
        sheet_id: str = "sheet-eng",
        *,
        name: str = "Engineering",
        type: FrameworkType = FrameworkType.DEPARTMENT,
        department: str | None = "Engineering",
        tab_name: str | None = None,
    ):
        db = session_factory()
        try:
            source = SourceWriteRepo(db).create_source(
                SheetMetadata(
                    type=type,
                    name=name,
                    department=department,
                    sheet_url=f"https://docs.google.com/spreadsheets/d/{sheet_id}/edit",
                    sheet_id=sheet_id,
                    tab_name=tab_name,
                )
            )
            db.commit()
            return source
        finally:
            db.close()

    return _make
