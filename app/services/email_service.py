"""
Email Service - delivers generated resume PDFs over SMTP
"""
from email.message import EmailMessage
from email.utils import formataddr
import html as html_module
import logging
import mimetypes
import os
import smtplib
import ssl
from typing import Optional

from app.core.config import Settings

logger = logging.getLogger(__name__)


class EmailService:
    """SMTP notifier, constructed once at startup and shared by all requests."""

    def __init__(self, settings: Settings, generated_dir: Optional[str] = None):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.secure = settings.SMTP_SECURE
        self.timeout = settings.SMTP_TIMEOUT
        self.username = settings.INFO_EMAIL
        self.password = settings.INFO_MAIL_AUTH
        self.sender_name = settings.MAIL_SENDER_NAME
        self.generated_dir = generated_dir or settings.GENERATED_DIR

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.secure:
            # true for port 465, false for other ports
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if not self.secure:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
            if self.password:
                server.login(self.username, self.password)
        except BaseException:
            # the caller's with-block never starts, so the socket is ours to close
            server.close()
            raise
        return server

    def build_resume_message(self, to_email: str, first_name: str, last_name: str, pdf_path: str) -> EmailMessage:
        extension = os.path.splitext(pdf_path)[1].lstrip(".") or "pdf"
        attachment_name = f"{first_name}_{last_name}_Resume.{extension}"
        full_name = html_module.escape(f"{first_name} {last_name}")

        message = EmailMessage()
        message["From"] = formataddr((self.sender_name, self.username))
        message["To"] = to_email
        message["Subject"] = f"Your Resume is Ready, {first_name}!"
        message.set_content(
            f"Hello {first_name} {last_name},\n\n"
            "Your resume has been successfully generated and is attached to this email.\n\n"
            f"Best regards,\n{self.sender_name}"
        )
        message.add_alternative(
            f"""
            <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
                <h2>Hello {full_name},</h2>
                <p>Thank you for using {html_module.escape(self.sender_name)}! Your resume has been successfully generated.</p>
                <p>Please find your resume attached to this email.</p>
                <p>If you need to make any changes to your resume, you can do so by logging back into our platform.</p>
                <p>Best regards,<br>{html_module.escape(self.sender_name)}</p>
            </div>
            """,
            subtype="html",
        )

        mime_type, _ = mimetypes.guess_type(pdf_path)
        maintype, subtype = (mime_type or "application/pdf").split("/", 1)
        with open(pdf_path, "rb") as f:
            message.add_attachment(f.read(), maintype=maintype, subtype=subtype, filename=attachment_name)
        return message

    def send_resume_pdf(self, to_email: str, first_name: str, last_name: str, pdf_filename: str) -> bool:
        """Email the generated PDF to its owner. Returns False instead of raising."""
        full_path = os.path.join(self.generated_dir, os.path.basename(pdf_filename))
        if not os.path.isfile(full_path):
            logger.error("File not found at path: %s", full_path)
            return False

        try:
            message = self.build_resume_message(to_email, first_name, last_name, full_path)
            with self._connect() as server:
                refused = server.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error("Error sending email to %s: %s", to_email, e)
            return False

        if refused:
            logger.error("Recipients refused: %s", refused)
            return False

        logger.info("Email sent successfully to %s", to_email)
        return True

    def verify(self) -> bool:
        """Check that the SMTP server is reachable and accepts our credentials."""
        try:
            with self._connect() as server:
                server.noop()
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("Email service is not properly configured, emails may not be sent: %s", e)
            return False
        logger.info("Email service is ready to send messages")
        return True
