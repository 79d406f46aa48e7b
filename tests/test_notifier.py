import smtplib

from turnos.notifier import LogNotifier, SmtpNotifier, build_notifier


class _FakeSMTP:
    sent = []
    fail_with = None

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        if self.fail_with:
            raise self.fail_with

    def send_message(self, msg):
        _FakeSMTP.sent.append(msg)


def _notifier():
    return SmtpNotifier("smtp.example.com", 587, "turnos@example.com", "secret")


def test_confirmation_message_contents():
    msg = _notifier().build_message("ana@example.com", "Ana Gomez", "2099-06-01", "14:00", "abc-123")
    assert msg["To"] == "ana@example.com"
    assert msg["Subject"] == "Appointment confirmed - 2099-06-01 at 14:00"
    assert "Mi Turno" in msg["From"]
    html = msg.get_body(preferencelist=("html",)).get_content()
    assert "Ana Gomez" in html and "abc-123" in html


def test_send_success(monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    monkeypatch.setattr(_FakeSMTP, "sent", [])
    assert _notifier().notify_confirmation("ana@example.com", "Ana", "2099-06-01", "14:00", "abc") is True
    assert len(_FakeSMTP.sent) == 1


def test_transport_failure_returns_false(monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    monkeypatch.setattr(_FakeSMTP, "fail_with", smtplib.SMTPAuthenticationError(535, b"bad credentials"))
    assert _notifier().notify_confirmation("ana@example.com", "Ana", "2099-06-01", "14:00", "abc") is False


def test_build_notifier_without_credentials_logs_only():
    assert isinstance(build_notifier({"SMTP_USER": None, "SMTP_PASSWORD": None}), LogNotifier)
    assert LogNotifier().notify_confirmation("a@example.com", "A", "2099-06-01", "14:00", "x") is False

    smtp = build_notifier({
        "SMTP_USER": "turnos@example.com",
        "SMTP_PASSWORD": "secret",
        "SMTP_HOST": "smtp.example.com",
        "SMTP_PORT": 587,
    })
    assert isinstance(smtp, SmtpNotifier)
