from typing import Any, Dict, List, Optional

ROLE_SEPARATOR = ", "

# Stored for optional sections (extraCurricular, leadership) the client omitted
EMPTY_SECTION: Dict[str, Any] = {}


def join_roles(roles: Optional[List[str]]) -> Optional[str]:
    """Join a desiredRoles list into the delimited column value."""
    if roles is None:
        return None
    return ROLE_SEPARATOR.join(roles)


def split_roles(value: Any) -> List[str]:
    """Split the delimited desiredRoles column back into a list.

    Lists pass through untouched so the helper is safe to call on values
    that were never persisted.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if value == "":
        return []
    return str(value).split(ROLE_SEPARATOR)


def optional_section(value: Any) -> Any:
    """Use the empty-section sentinel when an optional section is absent."""
    if value is None:
        return dict(EMPTY_SECTION)
    return value


def section_or_default(value: Any, default: Any) -> Any:
    if value is None:
        return default
    return value


def pdf_url(pdf_filename: Optional[str]) -> Optional[str]:
    """Derive the public download path for a generated file."""
    if not pdf_filename:
        return None
    return f"/generated/{pdf_filename}"


def download_name(first_name: Any, last_name: Any, extension: str = "pdf") -> str:
    return f"{first_name}_{last_name}_Resume.{extension}"


def expand_sections(r: Any) -> Dict[str, Any]:
    """Expand the JSON columns of a stored resume into the nested section keys."""
    return {
        "education": section_or_default(getattr(r, "educationJson", None), []),
        "skills": section_or_default(getattr(r, "skillsJson", None), {}),
        "experience": section_or_default(getattr(r, "experienceJson", None), []),
        "projects": section_or_default(getattr(r, "projectsJson", None), []),
        "extraCurricular": getattr(r, "extraCurricularJson", None),
        "leadership": getattr(r, "leadershipJson", None),
    }


def to_resume_data(r: Any) -> Dict[str, Any]:
    """Rebuild the submitted nested shape from a stored resume's columns.

    This is what the renderer receives when a PDF has to be produced for a
    record that was saved without one.
    """
    data = {
        "personalDetails": {
            "firstName": r.firstName,
            "lastName": r.lastName,
            "email": r.email,
            "phone": r.phone,
            "location": r.location,
            "portfolio": r.portfolioUrl,
            "linkedin": r.linkedinUrl,
        },
        "objective": {
            "summary": r.objective,
            "yearsExperience": r.yearsExperience,
            "desiredRoles": split_roles(r.desiredRoles),
        },
    }
    data.update(expand_sections(r))
    return data
