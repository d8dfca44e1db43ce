from .ResumeSchemas import (
	PersonalDetails,
	Objective,
	ResumeIn,
	ResumeRecord,
	ResumeDetail,
	CreateResumeResponse,
	UpdateResumeResponse,
	MessageResponse,
	ErrorResponse,
)

__all__ = [
	"PersonalDetails",
	"Objective",
	"ResumeIn",
	"ResumeRecord",
	"ResumeDetail",
	"CreateResumeResponse",
	"UpdateResumeResponse",
	"MessageResponse",
	"ErrorResponse",
]
