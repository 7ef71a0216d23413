import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

logger = logging.getLogger(__name__)

SMTP_HOST = "smtp.gmail.com"
SMTP_SSL_PORT = 465


class MailCredentialsError(RuntimeError):
    """Raised when EMAIL_USER / EMAIL_PASS are not configured."""

    def __init__(self):
        super().__init__(
            "Email credentials not set. Add EMAIL_USER and EMAIL_PASS to environment variables."
        )


def parse_recipients(recipients: str) -> list[str]:
    """
    Split a comma-separated recipient string into addresses.
    Whitespace is trimmed and order preserved; empty entries
    (e.g. from a trailing comma) are dropped.
    """
    return [address.strip() for address in recipients.split(",") if address.strip()]


def build_message(sender: str, recipients: list[str], subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = subject
    msg.set_content(body)
    return msg


def send_summary_email(
    user: Optional[str],
    password: Optional[str],
    recipients: str,
    subject: str,
    summary: str,
) -> list[str]:
    """
    Send the summary as one plain-text email through Gmail SMTP.

    A new SMTP connection is opened for every call and closed afterwards.
    Returns the parsed recipient list. Raises ValueError when no address is
    left after parsing; SMTP and socket errors propagate.
    """
    if not user or not password:
        raise MailCredentialsError()

    to_addrs = parse_recipients(recipients)
    if not to_addrs:
        raise ValueError("No recipients defined")

    msg = build_message(user, to_addrs, subject, summary)

    with smtplib.SMTP_SSL(SMTP_HOST, SMTP_SSL_PORT) as server:
        server.login(user, password)
        server.send_message(msg, from_addr=user, to_addrs=to_addrs)

    logger.info("Summary email sent to %d recipient(s)", len(to_addrs))
    return to_addrs
