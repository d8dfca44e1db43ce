from sqlalchemy import Column, String, Text, DateTime, JSON
from app.db.session import Base
from datetime import datetime
import uuid


def generate_uuid():
    return str(uuid.uuid4())


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String, primary_key=True, index=True, default=generate_uuid)
    firstName = Column(String, nullable=False)
    lastName = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    location = Column(String, nullable=True)
    portfolioUrl = Column(String, nullable=True)
    linkedinUrl = Column(String, nullable=True)
    objective = Column(Text, nullable=False)
    yearsExperience = Column(String, nullable=True)
    # ", "-joined list of roles
    desiredRoles = Column(String, nullable=True)

    # Nested sections are stored verbatim
    educationJson = Column(JSON, nullable=True)
    skillsJson = Column(JSON, nullable=True)
    experienceJson = Column(JSON, nullable=True)
    projectsJson = Column(JSON, nullable=True)
    extraCurricularJson = Column(JSON, nullable=True)
    leadershipJson = Column(JSON, nullable=True)

    pdfFilename = Column(String, nullable=True)
    createdAt = Column(DateTime, default=datetime.utcnow, index=True)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
