"""
Email utilities for registration and approval notifications.

Delivery goes through FastAPI-Mail. Missing SMTP configuration skips the
message with a warning; delivery errors are logged and never retried.
"""
import logging
from html import escape
from datetime import datetime
from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

def validate_email_config() -> bool:
    """
    Validates that all required email configuration variables are set.

    Returns:
        bool: True if all required config is present, False otherwise
    """
    return settings.email_configured

def get_mail_client() -> FastMail:
    """
    Build a FastMail client from the current settings.
    """
    email_conf = ConnectionConfig(
        MAIL_USERNAME=settings.mail_username,
        MAIL_PASSWORD=settings.mail_password,
        MAIL_FROM=settings.mail_from,
        MAIL_PORT=settings.mail_port,
        MAIL_SERVER=settings.mail_server,
        MAIL_STARTTLS=settings.mail_starttls,
        MAIL_SSL_TLS=settings.mail_ssl_tls,
        USE_CREDENTIALS=settings.use_credentials,
        VALIDATE_CERTS=settings.validate_certs,
    )
    return FastMail(email_conf)

async def send_email(to: str, subject: str, html: str) -> bool:
    """
    Send an HTML email.

    Args:
        to: Recipient address
        subject: Subject line
        html: HTML body

    Returns:
        bool: True if the message was handed to the SMTP server
    """
    if not validate_email_config():
        logger.warning(f"Email not configured, skipping: {subject}")
        return False

    message = MessageSchema(
        subject=subject,
        recipients=[to],
        body=html,
        subtype=MessageType.html,
    )
    try:
        await get_mail_client().send_message(message)
    except Exception as e:
        logger.error(f"Email send error: {str(e)}")
        return False

    logger.info(f"Email sent: {subject}")
    return True

def _wrap(content: str) -> str:
    return f"""
    <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6;">
            {content}
            <p style="font-size: 12px; color: #777;">&copy; {datetime.now().year} MMGH. All rights reserved.</p>
        </body>
    </html>
    """

def registration_request_email(full_name: str, username: str, email: str, role: str):
    """Subject and body of the notice sent to the admin mailbox on signup."""
    subject = "New User Registration Approval Needed"
    html = _wrap(f"""
            <h2>New User Registration</h2>
            <p><strong>{escape(full_name)}</strong> ({escape(username)}) has requested access as <strong>{escape(role)}</strong>.</p>
            <p>Email: {escape(email)}</p>
            <p>Please log in to approve or reject this user.</p>
    """)
    return subject, html

def approval_email(full_name: str):
    subject = "Your Account has been Approved"
    html = _wrap(f"""
            <h2>Welcome to MMGH!</h2>
            <p>Hi {escape(full_name)},</p>
            <p>Your account has been approved and you can now log in to the system.</p>
            <p>Visit: {escape(settings.app_url)}</p>
    """)
    return subject, html

def rejection_email(full_name: str, reason: str):
    subject = "Account Registration Rejected"
    html = _wrap(f"""
            <h2>Registration Status</h2>
            <p>Hi {escape(full_name)},</p>
            <p>Unfortunately, your registration request has been rejected.</p>
            <p>Reason: {escape(reason)}</p>
            <p>Contact the administrator for more information.</p>
    """)
    return subject, html
