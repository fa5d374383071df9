import logging
from typing import List, Tuple

import pytest
from spa_booking.usecases import notifications as uc


class CapturingMailer:
    def __init__(self) -> None:
        self.sent: List[Tuple[str, str, str]] = []

    @property
    def enabled(self) -> bool:
        return True

    def send(self, to_email: str, subject: str, html_body: str) -> None:
        self.sent.append((to_email, subject, html_body))


class ExplodingMailer(CapturingMailer):
    def send(self, to_email: str, subject: str, html_body: str) -> None:
        raise OSError("connection refused")


def test_format_booking_date_iso() -> None:
    assert uc.format_booking_date("2024-07-01") == "Monday, July 01, 2024"


def test_format_booking_date_passes_through_unparseable_text() -> None:
    assert uc.format_booking_date("next tuesday") == "next tuesday"


def test_confirmation_html_lists_booking_details() -> None:
    body = uc.build_confirmation_html(name="Ana", date="2024-07-01", time="14:00", people=2, booking_id=17)
    assert "Dear Ana," in body
    assert "Date: Monday, July 01, 2024" in body
    assert "Time: 14:00" in body
    assert "Number of guests: 2" in body
    assert "Booking reference: #17" in body


def test_confirmation_html_escapes_name() -> None:
    body = uc.build_confirmation_html(name="<b>Eve</b>", date="2024-07-01", time="14:00", people=1, booking_id=1)
    assert "<b>Eve</b>" not in body
    assert "&lt;b&gt;Eve&lt;/b&gt;" in body


def test_send_booking_confirmation_uses_subject_and_recipient() -> None:
    mailer = CapturingMailer()
    uc.send_booking_confirmation(
        mailer, to_email="ana@example.com", name="Ana", date="2024-07-01", time="14:00", people=2, booking_id=3
    )
    assert len(mailer.sent) == 1
    to_email, subject, body = mailer.sent[0]
    assert to_email == "ana@example.com"
    assert subject == "Six Spa - Booking Confirmation"
    assert "#3" in body


def test_send_booking_confirmation_swallows_failures(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger=uc.__name__):
        uc.send_booking_confirmation(
            ExplodingMailer(), to_email="ana@example.com", name="Ana", date="2024-07-01", time="14:00", people=2, booking_id=3
        )
    assert any("booking 3" in record.getMessage() for record in caplog.records)
