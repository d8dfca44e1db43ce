"""
Shared fixtures: an in-memory database, a renderer that writes a stub PDF
instead of launching a browser, and a notifier that records instead of
talking to SMTP.
"""
import os
import tempfile
import uuid
from pathlib import Path

# Configure before the app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GENERATED_DIR", tempfile.mkdtemp(prefix="generated_"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_notifier, get_renderer
from app.core.exceptions import RenderError
from app.db.session import Base, get_db
from app.services.resume_pdf import ResumePdfRenderer
import app.models  # noqa: F401
from main import app as fastapi_app

STUB_PDF = b"%PDF-1.4\n%stub\n"


class FakeRenderer(ResumePdfRenderer):
    def __init__(self, output_dir: str):
        super().__init__(output_dir)
        self.calls = []
        self.fail = False

    async def render(self, resume_data):
        self.calls.append(resume_data)
        if self.fail:
            raise RenderError("Failed to generate PDF", RuntimeError("no browser"))
        pdf_filename = f"resume_{uuid.uuid4()}.pdf"
        Path(self.path_for(pdf_filename)).write_bytes(STUB_PDF)
        return pdf_filename


class FakeNotifier:
    def __init__(self):
        self.sent = []
        self.result = True

    def send_resume_pdf(self, to_email, first_name, last_name, pdf_filename):
        self.sent.append((to_email, first_name, last_name, pdf_filename))
        return self.result


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def generated_dir(tmp_path):
    out = tmp_path / "generated"
    out.mkdir()
    return out


@pytest.fixture
def renderer(generated_dir):
    return FakeRenderer(str(generated_dir))


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(db_session, renderer, notifier):
    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_renderer] = lambda: renderer
    fastapi_app.dependency_overrides[get_notifier] = lambda: notifier
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
def minimal_resume():
    return {
        "personalDetails": {"firstName": "Ada", "lastName": "Lovelace", "email": "ada@x.com"},
        "objective": {"summary": "Engineer"},
        "education": [],
        "skills": {"technical": []},
        "experience": [],
        "projects": [],
    }


@pytest.fixture
def full_resume():
    return {
        "personalDetails": {
            "firstName": "Grace",
            "lastName": "Hopper",
            "email": "grace@navy.mil",
            "phone": "555-0100",
            "location": "Arlington, VA",
            "portfolio": "https://grace.example.com",
            "linkedin": "https://linkedin.com/in/grace",
        },
        "objective": {
            "summary": "Compiler pioneer",
            "yearsExperience": "40",
            "desiredRoles": ["Backend", "Infra"],
        },
        "education": [
            {
                "degree": "PhD Mathematics",
                "university": "Yale",
                "graduationYear": "1934",
                "coursework": ["Algebra", "Analysis"],
            }
        ],
        "skills": {"technical": ["COBOL", "FLOW-MATIC"], "soft": ["Teaching"], "additional": []},
        "experience": [
            {
                "jobTitle": "Rear Admiral",
                "company": "US Navy",
                "location": "Washington",
                "startDate": "1943-12",
                "endDate": "Present",
                "achievements": "Led the COBOL standardisation effort.",
            }
        ],
        "projects": [{"title": "A-0", "description": "First compiler", "link": "https://a0.example.com"}],
        "extraCurricular": {"activities": "Lecturing", "socialLinks": []},
        "leadership": {"role": "Director", "organization": "Navy Programming Languages Group", "responsibilities": "Standards"},
    }
