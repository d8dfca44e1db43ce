from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from app.core.exceptions import ResumeNotFoundError, StoreError
from app.models.resume import Resume, generate_uuid
from app.schemas.ResumeSchemas import ResumeIn
from app.services.resume_normalization import join_roles, optional_section

logger = logging.getLogger(__name__)


def _columns_from_input(resume_data: ResumeIn) -> Dict[str, Any]:
    """Flatten a submission into column values (full replace, no merge)."""
    personal = resume_data.personalDetails
    objective = resume_data.objective

    years = objective.yearsExperience if objective else None

    return {
        "firstName": personal.firstName if personal else None,
        "lastName": personal.lastName if personal else None,
        "email": personal.email if personal else None,
        "phone": (personal.phone if personal else None) or None,
        "location": (personal.location if personal else None) or None,
        "portfolioUrl": (personal.portfolio if personal else None) or None,
        "linkedinUrl": (personal.linkedin if personal else None) or None,
        "objective": objective.summary if objective else None,
        "yearsExperience": str(years) if years not in (None, "") else None,
        "desiredRoles": join_roles(objective.desiredRoles) if objective else None,
        # Store JSON data for complex nested structures
        "educationJson": resume_data.education,
        "skillsJson": resume_data.skills,
        "experienceJson": resume_data.experience,
        "projectsJson": resume_data.projects,
        "extraCurricularJson": optional_section(resume_data.extraCurricular),
        "leadershipJson": optional_section(resume_data.leadership),
    }


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error during resume %s: %s", action, e)
        raise StoreError(f"Failed to {action} resume", e) from e


def get_resumes(db: Session) -> List[Resume]:
    """Return every resume, newest first."""
    try:
        return db.query(Resume).order_by(Resume.createdAt.desc()).all()
    except SQLAlchemyError as e:
        logger.error("Error fetching resumes: %s", e)
        raise StoreError("Failed to fetch resumes", e) from e


def get_resume(db: Session, resume_id: str) -> Optional[Resume]:
    try:
        return db.query(Resume).filter(Resume.id == resume_id).first()
    except SQLAlchemyError as e:
        logger.error("Error fetching resume %s: %s", resume_id, e)
        raise StoreError("Failed to fetch resume", e) from e


def _get_or_raise(db: Session, resume_id: str) -> Resume:
    db_resume = get_resume(db, resume_id)
    if db_resume is None:
        raise ResumeNotFoundError(resume_id)
    return db_resume


def create_resume(db: Session, resume_data: ResumeIn, pdf_filename: Optional[str] = None) -> Resume:
    """
    Create a new resume in the database.
    """
    now = datetime.utcnow()
    db_resume = Resume(
        id=generate_uuid(),
        pdfFilename=pdf_filename or None,
        createdAt=now,
        updatedAt=now,
        **_columns_from_input(resume_data),
    )

    db.add(db_resume)
    _commit(db, "create")
    db.refresh(db_resume)

    logger.info("Created resume %s", db_resume.id)
    return db_resume


def update_resume(db: Session, resume_id: str, resume_data: ResumeIn) -> Resume:
    """Replace every field of an existing resume. pdfFilename is left as is."""
    db_resume = _get_or_raise(db, resume_id)

    for column, value in _columns_from_input(resume_data).items():
        setattr(db_resume, column, value)
    db_resume.updatedAt = datetime.utcnow()

    _commit(db, "update")
    db.refresh(db_resume)

    logger.info("Updated resume %s", resume_id)
    return db_resume


def set_pdf_filename(db: Session, resume_id: str, pdf_filename: str) -> Resume:
    db_resume = _get_or_raise(db, resume_id)
    db_resume.pdfFilename = pdf_filename

    _commit(db, "update")
    db.refresh(db_resume)
    return db_resume


def delete_resume(db: Session, resume_id: str) -> None:
    db_resume = _get_or_raise(db, resume_id)
    db.delete(db_resume)
    _commit(db, "delete")
    logger.info("Deleted resume %s", resume_id)
