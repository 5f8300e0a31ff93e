# gmail_mailer/mail_client.py
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from rich import print

from . import config
from .errors import ConfigurationError, DeliveryError, ValidationError
from .transport import AUTH_TYPE, SERVICE_NAME, create_transport

Recipients = Mapping[str, Optional[Union[str, Sequence[str]]]]


@dataclass
class SendResult:
    message_id: Any
    info: Dict = field(default_factory=dict)


def is_missing(value) -> bool:
    """None, 빈 문자열, 빈 리스트 → 누락. 공백 문자열은 값으로 취급."""
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False


def format_recipients(addresses) -> Optional[str]:
    """
    주소 목록 → 헤더 문자열.
        []/None     -> None (필드 생략)
        ["a"]       -> "a"
        ["a", "b"]  -> "a, b"
    """
    if is_missing(addresses):
        return None
    if isinstance(addresses, str):
        return addresses
    if len(addresses) == 1:
        return addresses[0]
    return ", ".join(addresses)


class MailClient:
    """
    OAuth2 자격 증명으로 Gmail을 통해 HTML 메일을 보내는 클라이언트.

    Example:
        client = MailClient(user, client_id, client_secret, access_token, refresh_token)
        future = client.send_email(
            "jane@gmail.com",
            {"to": ["john@gmail.com"], "cc": ["boss@gmail.com"]},
            "Merged pull requests in last 24h",
            "<h1>Foobar</h1>",
        )
        future.result().message_id
    """

    def __init__(
        self,
        user: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ):
        checks = (
            (user, "OAuth2 user is missing"),
            (client_id, "OAuth2 client id is missing"),
            (client_secret, "OAuth2 client secret is missing"),
            (access_token, "OAuth2 access token is missing."),
            (refresh_token,
             "OAuth2 refresh token is missing. Please obtain refresh token and put in your configuration"),
        )
        for value, error in checks:
            if is_missing(value):
                raise ConfigurationError(error)

        self._user = user
        self._id = client_id
        self._secret = client_secret
        self._access_token = access_token
        self._refresh_token = refresh_token

    @classmethod
    def from_env(cls) -> "MailClient":
        """config(.env) 값으로 생성."""
        return cls(
            config.GMAIL_OAUTH_USER,
            config.GMAIL_OAUTH_CLIENT_ID,
            config.GMAIL_OAUTH_CLIENT_SECRET,
            config.GMAIL_OAUTH_ACCESS_TOKEN,
            config.GMAIL_OAUTH_REFRESH_TOKEN,
        )

    @property
    def user(self) -> str:
        return self._user

    @property
    def client_id(self) -> str:
        return self._id

    @property
    def client_secret(self) -> str:
        return self._secret

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def refresh_token(self) -> str:
        return self._refresh_token

    def __repr__(self) -> str:
        return f"MailClient(user={self._user!r}, client_id={self._id!r})"

    # =========================
    # 전송
    # =========================
    def transport_config(self) -> Dict:
        return {
            "service": SERVICE_NAME,
            "auth": {
                "type": AUTH_TYPE,
                "user": self._user,
                "client_id": self._id,
                "client_secret": self._secret,
                "access_token": self._access_token,
                "refresh_token": self._refresh_token,
            },
        }

    def build_message(self, sender: str, recipients: Recipients, subject: str, content: str) -> Dict:
        message = {"from": sender}
        for key in ("to", "cc", "bcc"):
            value = format_recipients(recipients.get(key))
            if value is not None:
                message[key] = value
        message["subject"] = subject
        message["html"] = content
        return message

    def send_email(
        self,
        sender: Optional[str] = None,
        recipients: Optional[Recipients] = None,
        subject: Optional[str] = None,
        content: Optional[str] = None,
    ) -> "Future[SendResult]":
        """
        메일 한 통 전송.

        검증 실패는 즉시 ValidationError. 전송 결과는 반환된 Future로 전달:
        성공 시 SendResult, 실패 시 DeliveryError.
        """
        if is_missing(sender):
            raise ValidationError("Email sender is missing")
        if recipients is None:
            raise ValidationError("Missing recipients")
        if is_missing(recipients.get("to")):
            raise ValidationError("Direct recipient is missing(to)")
        if is_missing(subject):
            raise ValidationError("Email subject is missing")
        if is_missing(content):
            raise ValidationError("Email content is missing")

        message = self.build_message(sender, recipients, subject, content)
        transport = create_transport(self.transport_config())

        future: Future = Future()
        future.set_running_or_notify_cancel()

        def on_sent(error, info):
            if error:
                failure = DeliveryError(f"Can not send email. Stack trace: {error}", detail=error)
                if isinstance(error, BaseException):
                    failure.__cause__ = error
                future.set_exception(failure)
                return
            try:
                info = dict(info or {})
                print(f"[green]Message sent: {info.get('messageId')}[/green]")
                result = SendResult(info.get("messageId"), info)
            except Exception as e:
                future.set_exception(e)
                return
            future.set_result(result)

        transport.send_mail(message, on_sent)
        return future
