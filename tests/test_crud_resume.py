"""
Test the resume store and its normalization helpers
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError
from unittest.mock import patch

from app.core.exceptions import ResumeNotFoundError, StoreError
from app.crud import crud_resume
from app.schemas.ResumeSchemas import ResumeIn
from app.services.resume_normalization import (
    join_roles,
    pdf_url,
    download_name,
    split_roles,
    to_resume_data,
)


def test_join_and_split_roles():
    roles = ["Backend Engineer", "SRE", "Data/ML"]
    assert join_roles(roles) == "Backend Engineer, SRE, Data/ML"
    assert split_roles(join_roles(roles)) == roles


def test_split_roles_empty_values():
    assert join_roles(None) is None
    assert split_roles(None) == []
    assert split_roles("") == []
    assert split_roles(["already", "a list"]) == ["already", "a list"]


def test_roles_containing_separator_are_lossy():
    assert split_roles(join_roles(["Lead, Platform"])) == ["Lead", "Platform"]


def test_pdf_url_and_download_name():
    assert pdf_url(None) is None
    assert pdf_url("resume_1.pdf") == "/generated/resume_1.pdf"
    assert download_name("Ada", "Lovelace") == "Ada_Lovelace_Resume.pdf"


def test_create_resume_maps_columns(db_session, full_resume):
    resume = crud_resume.create_resume(db_session, ResumeIn.model_validate(full_resume), pdf_filename="resume_x.pdf")

    assert resume.id
    assert resume.firstName == "Grace"
    assert resume.portfolioUrl == "https://grace.example.com"
    assert resume.linkedinUrl == "https://linkedin.com/in/grace"
    assert resume.objective == "Compiler pioneer"
    assert resume.desiredRoles == "Backend, Infra"
    assert resume.pdfFilename == "resume_x.pdf"
    assert resume.createdAt is not None


@pytest.mark.parametrize(
    "value",
    [
        [],
        {},
        [{"degree": "BSc", "coursework": []}],
        {"technical": ["Python"], "nested": {"deep": [1, 2.5, True, None, "x"]}},
    ],
)
def test_sections_round_trip(db_session, minimal_resume, value):
    for key in ("education", "skills", "experience", "projects", "extraCurricular", "leadership"):
        minimal_resume[key] = value

    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))
    db_session.expire_all()
    stored = crud_resume.get_resume(db_session, created.id)

    assert stored.educationJson == value
    assert stored.skillsJson == value
    assert stored.experienceJson == value
    assert stored.projectsJson == value
    assert stored.extraCurricularJson == value
    assert stored.leadershipJson == value


def test_absent_optional_sections_store_empty_marker(db_session, minimal_resume):
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))

    assert created.extraCurricularJson == {}
    assert created.leadershipJson == {}
    assert created.pdfFilename is None


def test_numeric_years_experience_is_stored_as_text(db_session, minimal_resume):
    minimal_resume["objective"]["yearsExperience"] = 7
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))
    assert created.yearsExperience == "7"


def test_get_resumes_orders_newest_first(db_session, minimal_resume):
    first = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))
    second = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))
    first.createdAt = datetime.utcnow() + timedelta(days=1)
    db_session.commit()

    assert [r.id for r in crud_resume.get_resumes(db_session)] == [first.id, second.id]


def test_update_resume_replaces_fields(db_session, full_resume, minimal_resume):
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(full_resume), pdf_filename="resume_a.pdf")

    updated = crud_resume.update_resume(db_session, created.id, ResumeIn.model_validate(minimal_resume))

    assert updated.firstName == "Ada"
    assert updated.phone is None
    assert updated.desiredRoles is None
    assert updated.leadershipJson == {}
    # the tracked PDF only changes through set_pdf_filename
    assert updated.pdfFilename == "resume_a.pdf"


def test_update_unknown_resume_raises(db_session, minimal_resume):
    with pytest.raises(ResumeNotFoundError):
        crud_resume.update_resume(db_session, "missing", ResumeIn.model_validate(minimal_resume))


def test_update_without_personal_details_is_a_store_error(db_session, minimal_resume):
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))

    with pytest.raises(StoreError):
        crud_resume.update_resume(db_session, created.id, ResumeIn.model_validate({"objective": {"summary": "x"}}))


def test_set_pdf_filename(db_session, minimal_resume):
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))

    updated = crud_resume.set_pdf_filename(db_session, created.id, "resume_b.pdf")

    assert updated.pdfFilename == "resume_b.pdf"
    with pytest.raises(ResumeNotFoundError):
        crud_resume.set_pdf_filename(db_session, "missing", "resume_c.pdf")


def test_delete_resume(db_session, minimal_resume):
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(minimal_resume))

    crud_resume.delete_resume(db_session, created.id)

    assert crud_resume.get_resume(db_session, created.id) is None
    with pytest.raises(ResumeNotFoundError):
        crud_resume.delete_resume(db_session, created.id)


def test_store_failure_is_wrapped(db_session):
    with patch.object(db_session, "query", side_effect=OperationalError("SELECT", {}, Exception("db down"))):
        with pytest.raises(StoreError):
            crud_resume.get_resumes(db_session)


def test_to_resume_data_rebuilds_submission_shape(db_session, full_resume):
    created = crud_resume.create_resume(db_session, ResumeIn.model_validate(full_resume))

    data = to_resume_data(created)

    assert data["personalDetails"] == full_resume["personalDetails"]
    assert data["objective"] == full_resume["objective"]
    for key in ("education", "skills", "experience", "projects", "extraCurricular", "leadership"):
        assert data[key] == full_resume[key]
