import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify_confirmation(self, email: str, name: str, date: str, time: str, reservation_id: str) -> bool:
        ...


def render_confirmation(name: str, date: str, time: str, reservation_id: str) -> tuple[str, str, str]:
    """Returns (subject, plain text body, html body) for a confirmation e-mail."""
    subject = f"Appointment confirmed - {date} at {time}"
    text = (
        f"Hi {name},\n\n"
        "Your appointment has been booked. Details:\n"
        f"  Date: {date}\n"
        f"  Time: {time}\n"
        f"  Reservation ID: {reservation_id}\n\n"
        "To cancel or change it, contact us quoting your reservation ID.\n"
    )
    html = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
          <h1 style="font-size: 22px;">Appointment confirmed</h1>
          <p>Hi <strong>{name}</strong>,</p>
          <p>Your appointment has been booked. Details:</p>
          <ul>
            <li><strong>Date:</strong> {date}</li>
            <li><strong>Time:</strong> {time}</li>
            <li><strong>Reservation ID:</strong> {reservation_id}</li>
          </ul>
          <p style="color: #666;">To cancel or change it, contact us quoting your reservation ID.</p>
        </div>
    """
    return subject, text, html


class SmtpNotifier:
    def __init__(self, host: str, port: int, username: str, password: str, sender_name: str = "Mi Turno", timeout: float = 10):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender_name = sender_name
        self.timeout = timeout

    def build_message(self, email: str, name: str, date: str, time: str, reservation_id: str) -> EmailMessage:
        subject, text, html = render_confirmation(name, date, time, reservation_id)
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self.sender_name, self.username))
        msg["To"] = email
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    def notify_confirmation(self, email: str, name: str, date: str, time: str, reservation_id: str) -> bool:
        msg = self.build_message(email, name, date, time, reservation_id)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.starttls()
                smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError):
            logger.exception("Could not send confirmation for reservation %s to %s", reservation_id, email)
            return False
        logger.info("Confirmation for reservation %s sent to %s", reservation_id, email)
        return True


class LogNotifier:
    """Used when no mail transport is configured: logs the confirmation and reports it as not sent."""

    def notify_confirmation(self, email: str, name: str, date: str, time: str, reservation_id: str) -> bool:
        logger.info("Mail transport not configured; skipping confirmation for reservation %s (%s)", reservation_id, email)
        return False


def build_notifier(config) -> Notifier:
    if config.get("SMTP_USER") and config.get("SMTP_PASSWORD"):
        return SmtpNotifier(
            host=config["SMTP_HOST"],
            port=config["SMTP_PORT"],
            username=config["SMTP_USER"],
            password=config["SMTP_PASSWORD"],
            sender_name=config.get("MAIL_SENDER_NAME", "Mi Turno"),
        )
    return LogNotifier()
