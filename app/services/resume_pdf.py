"""Render stored or submitted resume data into a PDF on disk.

The HTML comes from the Jinja2 template in ``app/templates/resume.html``; the
rasterization is delegated to headless Chromium (Playwright) or WeasyPrint.
Every render writes a new ``resume_<uuid>.pdf`` so concurrent renders never
share a file. Failures raise RenderError; callers that treat rendering as
optional go through ``try_render`` which logs and returns None instead.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import asyncio
import logging
import os
import uuid

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from app.core.exceptions import RenderError
from app.tools.pdf_generator import create_pdf, create_pdf_with_chromium

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
RESUME_TEMPLATE = "resume.html"

ENGINE_CHROMIUM = "chromium"
ENGINE_WEASYPRINT = "weasyprint"
ENGINES = (ENGINE_CHROMIUM, ENGINE_WEASYPRINT)

_DATE_FORMATS = (
    "%Y-%m",
    "%Y/%m",
    "%m/%Y",
    "%m/%d/%Y",
    "%B %Y",
    "%b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%Y",
)


def _parse_date(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Any) -> str:
    """Format a date as "Month Year"; anything unparseable (e.g. "Present") is returned as is."""
    if not value:
        return ""
    text = str(value).strip()
    parsed = _parse_date(text)
    if parsed is None:
        return text
    return parsed.strftime("%B %Y")


def join(value: Any, separator: str = ", ") -> str:
    if not isinstance(value, (list, tuple)):
        return ""
    return (separator or ", ").join(str(v) for v in value)


def is_not_empty(value: Any) -> bool:
    """True for a non-blank string, a non-empty list or a non-empty mapping."""
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, Mapping):
        return len(value) > 0
    return False


def _get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["format_date"] = format_date
    env.filters["join"] = join
    env.tests["not_empty"] = is_not_empty
    return env


def build_template_context(resume_data: Dict[str, Any]) -> Dict[str, Any]:
    """Prepare resume data for the template, adding personalDetails.fullName."""
    personal = dict(resume_data.get("personalDetails") or {})
    personal["fullName"] = f"{personal.get('firstName') or ''} {personal.get('lastName') or ''}".strip()
    return {**resume_data, "personalDetails": personal}


def render_resume_html(resume_data: Dict[str, Any]) -> str:
    """Fill the resume template with the provided data."""
    env = _get_env()
    template = env.get_template(RESUME_TEMPLATE)
    return template.render(build_template_context(resume_data))


def pdf_path(output_dir: str, pdf_filename: str) -> str:
    return os.path.join(output_dir, os.path.basename(pdf_filename))


class ResumePdfRenderer:
    """Turns resume data into a uniquely named PDF under ``output_dir``."""

    def __init__(self, output_dir: str, engine: str = ENGINE_CHROMIUM):
        if engine not in ENGINES:
            raise ValueError(f"Unknown PDF engine '{engine}', expected one of {ENGINES}")
        self.output_dir = output_dir
        self.engine = engine

    async def render(self, resume_data: Dict[str, Any]) -> str:
        """Render and rasterize; returns the generated filename or raises RenderError."""
        try:
            html = render_resume_html(resume_data)
        except TemplateError as e:
            logger.error("Error rendering resume template: %s", e)
            raise RenderError("Failed to render resume template", e) from e

        os.makedirs(self.output_dir, exist_ok=True)
        pdf_filename = f"resume_{uuid.uuid4()}.pdf"
        path = pdf_path(self.output_dir, pdf_filename)

        try:
            if self.engine == ENGINE_WEASYPRINT:
                await asyncio.to_thread(create_pdf, html, path)
            else:
                await create_pdf_with_chromium(html, path)
        except Exception as e:
            logger.exception("Error generating PDF with %s", self.engine)
            # a half-written file must not be mistaken for a finished render
            delete_pdf(self.output_dir, pdf_filename)
            raise RenderError("Failed to generate PDF", e) from e

        logger.info("PDF generated successfully: %s", pdf_filename)
        return pdf_filename

    def exists(self, pdf_filename: str) -> bool:
        return os.path.isfile(pdf_path(self.output_dir, pdf_filename))

    def path_for(self, pdf_filename: str) -> str:
        return pdf_path(self.output_dir, pdf_filename)


async def try_render(renderer: ResumePdfRenderer, resume_data: Dict[str, Any]) -> Optional[str]:
    """Render, treating failure as a missing PDF rather than an error."""
    try:
        return await renderer.render(resume_data)
    except RenderError as e:
        logger.warning("PDF generation skipped: %s", e.message)
        return None


def delete_pdf(output_dir: str, pdf_filename: str) -> bool:
    """Remove a generated PDF; returns False if it was absent or could not be removed."""
    path = pdf_path(output_dir, pdf_filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not delete PDF file %s: %s", pdf_filename, e)
        return False
    logger.info("Deleted PDF file: %s", pdf_filename)
    return True
