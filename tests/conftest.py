import pytest

from gmail_mailer import mail_client


class FakeTransport:
    def __init__(self, config):
        self.config = config
        self.calls = []

    def send_mail(self, message, callback):
        self.calls.append((message, callback))

    def yield_(self, error=None, info=None):
        _, callback = self.calls[-1]
        callback(error, info)


@pytest.fixture
def creds():
    return ("userName", "clientId", "clientSecret", "accessToken", "refreshToken")


@pytest.fixture
def client(creds):
    return mail_client.MailClient(*creds)


@pytest.fixture
def transports(monkeypatch):
    created = []

    def factory(config):
        t = FakeTransport(config)
        created.append(t)
        return t

    monkeypatch.setattr(mail_client, "create_transport", factory)
    return created


@pytest.fixture
def logs(monkeypatch):
    lines = []
    monkeypatch.setattr(mail_client, "print", lambda *args, **kw: lines.append(" ".join(map(str, args))))
    return lines
