from __future__ import annotations

import smtplib

import pytest

from internship_portal.core.exceptions import InviteDeliveryError
from internship_portal.invites import mailer as mailer_module
from internship_portal.invites.mailer import LoggingMailer, SmtpMailer, build_mailer


class FakeSMTP:
    instances: list["FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        self.messages.append(msg)


class RefusingSMTP(FakeSMTP):
    def __init__(self, host, port, timeout=None):
        raise ConnectionRefusedError("connection refused")


def test_build_mailer_without_host_logs_instead_of_sending():
    assert isinstance(build_mailer({"host": ""}), LoggingMailer)


def test_build_mailer_with_host_uses_smtp():
    mailer = build_mailer({"host": "smtp.demo.edu", "port": 2525, "user": "bot", "password": "pw"})
    assert isinstance(mailer, SmtpMailer)


def test_smtp_mailer_sends_message(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(mailer_module.smtplib, "SMTP", FakeSMTP)
    mailer = SmtpMailer(host="smtp.demo.edu", port=587, user="bot", password="pw", sender="no-reply@demo.edu")

    mailer.send(to="asha@demo.edu", subject="Hi", body="Welcome")

    server = FakeSMTP.instances[0]
    assert server.started_tls is True
    assert server.logged_in == ("bot", "pw")
    msg = server.messages[0]
    assert msg["To"] == "asha@demo.edu"
    assert msg["From"] == "no-reply@demo.edu"
    assert msg.get_content().strip() == "Welcome"


def test_smtp_failures_become_delivery_errors(monkeypatch):
    monkeypatch.setattr(mailer_module.smtplib, "SMTP", RefusingSMTP)
    mailer = SmtpMailer(host="smtp.demo.edu", port=587, user="", password="", sender="no-reply@demo.edu")

    with pytest.raises(InviteDeliveryError, match="connection refused"):
        mailer.send(to="asha@demo.edu", subject="Hi", body="Welcome")


def test_smtp_protocol_errors_become_delivery_errors(monkeypatch):
    class BrokenSMTP(FakeSMTP):
        def send_message(self, msg):
            raise smtplib.SMTPRecipientsRefused({"asha@demo.edu": (550, b"no such user")})

    monkeypatch.setattr(mailer_module.smtplib, "SMTP", BrokenSMTP)
    mailer = SmtpMailer(host="smtp.demo.edu", port=587, user="", password="", sender="no-reply@demo.edu", use_tls=False)

    with pytest.raises(InviteDeliveryError):
        mailer.send(to="asha@demo.edu", subject="Hi", body="Welcome")
