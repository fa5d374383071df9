import html
import logging
from datetime import date as date_type

from ..infrastructure.mailer import Mailer

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Six Spa - Booking Confirmation"


def format_booking_date(value: str) -> str:
    """Render ISO dates as 'Monday, July 01, 2024'; anything else is returned unchanged."""
    try:
        parsed = date_type.fromisoformat(value)
    except ValueError:
        return value
    return parsed.strftime("%A, %B %d, %Y")


def build_confirmation_html(*, name: str, date: str, time: str, people: int, booking_id: int) -> str:
    return f"""
<h2>Booking Confirmation</h2>
<p>Dear {html.escape(name)},</p>
<p>Thank you for choosing Six Spa. Your booking has been confirmed.</p>
<p><strong>Booking Details:</strong></p>
<ul>
  <li>Date: {html.escape(format_booking_date(date))}</li>
  <li>Time: {html.escape(time)}</li>
  <li>Number of guests: {people}</li>
  <li>Booking reference: #{booking_id}</li>
</ul>
<p>We look forward to welcoming you!</p>
<p>Best regards,<br>Six Spa Team</p>
"""


def send_booking_confirmation(
    mailer: Mailer,
    *,
    to_email: str,
    name: str,
    date: str,
    time: str,
    people: int,
    booking_id: int,
) -> None:
    """Best-effort confirmation email (run as a background task). Never raises."""
    body = build_confirmation_html(name=name, date=date, time=time, people=people, booking_id=booking_id)
    try:
        mailer.send(to_email, CONFIRMATION_SUBJECT, body)
    except Exception:
        logger.exception("Failed to send confirmation for booking %s to %s", booking_id, to_email)
