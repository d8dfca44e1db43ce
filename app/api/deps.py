from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.email_service import EmailService
from app.services.resume_pdf import ResumePdfRenderer
from app.services.resume_service import ResumeService


def get_renderer(request: Request) -> ResumePdfRenderer:
    """Renderer built once in the application lifespan."""
    return request.app.state.renderer


def get_notifier(request: Request) -> EmailService:
    """Notifier built once in the application lifespan."""
    return request.app.state.notifier


def get_resume_service(
    db: Session = Depends(get_db),
    renderer: ResumePdfRenderer = Depends(get_renderer),
    notifier: EmailService = Depends(get_notifier),
) -> ResumeService:
    return ResumeService(db, renderer, notifier)
