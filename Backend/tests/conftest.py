import pytest


class FakeSMTP:
    """Stands in for smtplib.SMTP_SSL and records what was sent."""

    instances: list = []
    fail_login = None

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.logged_in = None
        self.sent = []
        self.closed = False
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def login(self, user, password):
        if FakeSMTP.fail_login is not None:
            raise FakeSMTP.fail_login
        self.logged_in = (user, password)

    def send_message(self, msg, from_addr=None, to_addrs=None):
        self.sent.append((msg, from_addr, to_addrs))
        return {}


@pytest.fixture
def fake_smtp(monkeypatch):
    import smtplib

    FakeSMTP.instances = []
    FakeSMTP.fail_login = None
    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
    return FakeSMTP
