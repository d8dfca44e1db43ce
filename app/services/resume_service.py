"""
Resume Service

Orchestrates the store, the PDF renderer and the email notifier for each
resume endpoint. Store failures propagate (StoreError -> 500); rendering and
email are best effort and only degrade the response payload.

Store calls block, so the async methods run them with asyncio.to_thread; the
sync methods are served from the FastAPI threadpool.
"""
from typing import Any, Dict, List, Optional, Tuple
import asyncio
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import RenderError, ResumeNotFoundError, ResumeValidationError, StoreError
from app.crud import crud_resume
from app.models.resume import Resume
from app.schemas.ResumeSchemas import ResumeDetail, ResumeIn, ResumeRecord
from app.services.email_service import EmailService
from app.services.resume_normalization import (
    download_name,
    expand_sections,
    pdf_url,
    to_resume_data,
)
from app.services.resume_pdf import ResumePdfRenderer, delete_pdf, try_render

logger = logging.getLogger(__name__)


def validate_resume_input(resume_data: ResumeIn) -> None:
    """Ensure the fields every stored resume needs are present."""
    personal = resume_data.personalDetails
    missing = [
        f"personalDetails.{field}"
        for field in ("firstName", "lastName", "email")
        if personal is None or not getattr(personal, field)
    ]
    if missing:
        raise ResumeValidationError("Personal details are required", missing)

    if resume_data.objective is None or not resume_data.objective.summary:
        raise ResumeValidationError("Objective summary is required", ["objective.summary"])


def _record(resume: Resume) -> Dict[str, Any]:
    return ResumeRecord.model_validate(resume).model_dump()


class ResumeService:
    def __init__(self, db: Session, renderer: ResumePdfRenderer, notifier: EmailService):
        self.db = db
        self.renderer = renderer
        self.notifier = notifier

    async def _notify(self, email: str, first_name: str, last_name: str, pdf_filename: str) -> bool:
        email_sent = await asyncio.to_thread(
            self.notifier.send_resume_pdf, email, first_name, last_name, pdf_filename
        )
        logger.info("Email status for %s: %s", email, "Sent" if email_sent else "Failed to send")
        return email_sent

    def _get_or_404(self, resume_id: str) -> Resume:
        resume = crud_resume.get_resume(self.db, resume_id)
        if resume is None:
            raise ResumeNotFoundError(resume_id)
        return resume

    async def _load_or_404(self, resume_id: str) -> Resume:
        return await asyncio.to_thread(self._get_or_404, resume_id)

    async def create(self, resume_data: ResumeIn) -> Dict[str, Any]:
        validate_resume_input(resume_data)

        logger.info("Generating PDF from resume data...")
        pdf_filename = await try_render(self.renderer, resume_data.model_dump())

        resume = await asyncio.to_thread(crud_resume.create_resume, self.db, resume_data, pdf_filename=pdf_filename)

        email_sent = False
        if pdf_filename:
            personal = resume_data.personalDetails
            email_sent = await self._notify(personal.email, personal.firstName, personal.lastName, pdf_filename)

        return {
            "id": resume.id,
            "message": "Resume created successfully",
            "data": _record(resume),
            "pdfUrl": pdf_url(pdf_filename),
            "emailSent": email_sent,
        }

    def list_all(self) -> List[Dict[str, Any]]:
        resumes = crud_resume.get_resumes(self.db)
        logger.info("Fetched %d resumes", len(resumes))
        return [_record(r) for r in resumes]

    def get(self, resume_id: str) -> Dict[str, Any]:
        resume = self._get_or_404(resume_id)
        detail = {
            **_record(resume),
            **expand_sections(resume),
            "pdfUrl": pdf_url(resume.pdfFilename),
        }
        return ResumeDetail.model_validate(detail).model_dump()

    async def download(self, resume_id: str) -> Tuple[str, str]:
        """Return (path, attachment name), generating the PDF first if none was recorded.

        A render failure here is fatal: there is nothing to send back.
        """
        resume = await self._load_or_404(resume_id)

        if not resume.pdfFilename:
            logger.info("PDF not found for resume %s, generating new PDF...", resume_id)
            pdf_filename = await self.renderer.render(to_resume_data(resume))
            resume = await asyncio.to_thread(crud_resume.set_pdf_filename, self.db, resume_id, pdf_filename)

        if not self.renderer.exists(resume.pdfFilename):
            raise ResumeNotFoundError(resume_id, message="PDF file not found")

        return self.renderer.path_for(resume.pdfFilename), download_name(resume.firstName, resume.lastName)

    async def resend_email(self, resume_id: str) -> bool:
        resume = await self._load_or_404(resume_id)
        if not resume.pdfFilename:
            raise ResumeNotFoundError(resume_id, message="PDF not generated for this resume")
        return await self._notify(resume.email, resume.firstName, resume.lastName, resume.pdfFilename)

    async def update(self, resume_id: str, resume_data: ResumeIn) -> Dict[str, Any]:
        updated = await asyncio.to_thread(crud_resume.update_resume, self.db, resume_id, resume_data)
        data = _record(updated)

        # the resume changed, so a fresh PDF is generated and re-sent
        pdf_filename: Optional[str] = None
        try:
            pdf_filename = await self.renderer.render(resume_data.model_dump())
            await asyncio.to_thread(crud_resume.set_pdf_filename, self.db, resume_id, pdf_filename)
        except RenderError as e:
            logger.error("Error generating updated PDF for resume %s: %s", resume_id, e.message)
        except StoreError as e:
            logger.error("Error saving updated PDF filename for resume %s: %s", resume_id, e)
            pdf_filename = None

        if pdf_filename:
            await self._notify(updated.email, updated.firstName, updated.lastName, pdf_filename)

        return {
            "message": "Resume updated successfully",
            "data": data,
            "pdfUrl": pdf_url(pdf_filename),
        }

    def delete(self, resume_id: str) -> None:
        resume = self._get_or_404(resume_id)
        if resume.pdfFilename:
            delete_pdf(self.renderer.output_dir, resume.pdfFilename)
        crud_resume.delete_resume(self.db, resume_id)
