from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from typing import List

from app.api.deps import get_resume_service
from app.core.exceptions import RenderError, StoreError
from app.schemas.ResumeSchemas import (
    CreateResumeResponse,
    ErrorResponse,
    MessageResponse,
    ResumeDetail,
    ResumeIn,
    ResumeRecord,
    UpdateResumeResponse,
)
from app.services.resume_service import ResumeService

router = APIRouter()


def _errors(*status_codes: int) -> dict:
    return {code: {"model": ErrorResponse} for code in status_codes}


def _failure(error: str, e: Exception) -> dict:
    return {"error": error, "details": str(e)}


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateResumeResponse, responses=_errors(400, 500))
async def create_resume(resume_in: ResumeIn, service: ResumeService = Depends(get_resume_service)):
    """
    Store a new resume, render its PDF and email it to the owner.

    Rendering and email are best effort: when either fails the resume is
    still saved and the response reports pdfUrl=null / emailSent=false.
    """
    try:
        return await service.create(resume_in)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to create resume", e))


@router.get("", response_model=List[ResumeRecord], responses=_errors(500))
def read_resumes(service: ResumeService = Depends(get_resume_service)):
    try:
        return service.list_all()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to fetch resumes", e))


@router.get("/{resume_id}", response_model=ResumeDetail, responses=_errors(404, 500))
def read_resume(resume_id: str, service: ResumeService = Depends(get_resume_service)):
    try:
        return service.get(resume_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to fetch resume", e))


@router.get("/{resume_id}/pdf", response_class=FileResponse, responses=_errors(404, 500))
async def download_resume_pdf(resume_id: str, service: ResumeService = Depends(get_resume_service)):
    """Download the resume PDF, generating it first if none exists yet."""
    try:
        path, filename = await service.download(resume_id)
    except (StoreError, RenderError) as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to download resume PDF", e))
    return FileResponse(path, media_type="application/pdf", filename=filename)


@router.post("/{resume_id}/email", response_model=MessageResponse, responses=_errors(404, 500))
async def resend_resume_email(resume_id: str, service: ResumeService = Depends(get_resume_service)):
    try:
        email_sent = await service.resend_email(resume_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to resend resume PDF", e))

    if not email_sent:
        raise HTTPException(status_code=500, detail={"error": "Failed to send resume PDF via email"})
    return {"message": "Resume PDF sent successfully to your email"}


@router.put("/{resume_id}", response_model=UpdateResumeResponse, responses=_errors(400, 404, 500))
async def update_resume(resume_id: str, resume_in: ResumeIn, service: ResumeService = Depends(get_resume_service)):
    """Replace every field of a resume, then regenerate and re-send its PDF."""
    try:
        return await service.update(resume_id, resume_in)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to update resume", e))


@router.delete("/{resume_id}", response_model=MessageResponse, responses=_errors(404, 500))
def delete_resume(resume_id: str, service: ResumeService = Depends(get_resume_service)):
    try:
        service.delete(resume_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=_failure("Failed to delete resume", e))
    return {"message": "Resume deleted successfully"}
