from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator
from typing import List, Optional, Union
from datetime import datetime

from app.services.resume_normalization import split_roles


class PersonalDetails(BaseModel):
    # Presence is checked by the create handler so a missing field is a 400, not a 422
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    portfolio: Optional[str] = None
    linkedin: Optional[str] = None


class Objective(BaseModel):
    summary: Optional[str] = None
    yearsExperience: Optional[Union[str, int, float]] = None
    desiredRoles: Optional[List[str]] = None


class ResumeIn(BaseModel):
    """Full resume submission, used for both create and update."""

    model_config = ConfigDict(extra="ignore")

    personalDetails: Optional[PersonalDetails] = None
    objective: Optional[Objective] = None
    # allow any JSON shape for the nested sections; they are stored verbatim
    education: Optional[JsonValue] = None
    skills: Optional[JsonValue] = None
    experience: Optional[JsonValue] = None
    projects: Optional[JsonValue] = None
    extraCurricular: Optional[JsonValue] = None
    leadership: Optional[JsonValue] = None


class ResumeRecord(BaseModel):
    """A stored resume as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    firstName: str
    lastName: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    portfolioUrl: Optional[str] = None
    linkedinUrl: Optional[str] = None
    objective: str
    yearsExperience: Optional[str] = None
    desiredRoles: List[str] = Field(default_factory=list)
    educationJson: Optional[JsonValue] = None
    skillsJson: Optional[JsonValue] = None
    experienceJson: Optional[JsonValue] = None
    projectsJson: Optional[JsonValue] = None
    extraCurricularJson: Optional[JsonValue] = None
    leadershipJson: Optional[JsonValue] = None
    pdfFilename: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @field_validator("desiredRoles", mode="before")
    @classmethod
    def _split_desired_roles(cls, v):
        return split_roles(v)


class ResumeDetail(ResumeRecord):
    education: Optional[JsonValue] = None
    skills: Optional[JsonValue] = None
    experience: Optional[JsonValue] = None
    projects: Optional[JsonValue] = None
    extraCurricular: Optional[JsonValue] = None
    leadership: Optional[JsonValue] = None
    pdfUrl: Optional[str] = None


class CreateResumeResponse(BaseModel):
    id: str
    message: str
    data: ResumeRecord
    pdfUrl: Optional[str] = None
    emailSent: bool = False


class UpdateResumeResponse(BaseModel):
    message: str
    data: ResumeRecord
    pdfUrl: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Union[str, List[str]]] = None
