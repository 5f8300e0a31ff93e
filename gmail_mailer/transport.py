# gmail_mailer/transport.py
from __future__ import annotations

import base64
from concurrent.futures import ThreadPoolExecutor
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Callable, Dict, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from markdownify import markdownify as md

from .config import GMAIL_TOKEN_URI
from .errors import ConfigurationError

# =========================
# 설정
# =========================
SCOPES = ["https://www.googleapis.com/auth/gmail.send"]

SERVICE_NAME = "gmail"
AUTH_TYPE = "OAuth2"

# 메시지 키 → MIME 헤더 (있는 것만 기록)
_HEADERS = (
    ("from", "From"),
    ("to", "To"),
    ("cc", "Cc"),
    ("bcc", "Bcc"),
    ("subject", "Subject"),
)

# error는 예외 또는 임의의 값 (문자열 등)
SendCallback = Callable[[Any, Optional[Dict]], None]


# =========================
# MIME 조립
# =========================
def build_mime_message(message: Dict) -> MIMEMultipart:
    """
    메시지 dict → multipart/alternative.
    - text/plain: HTML을 markdownify로 변환한 대체 본문
    - text/html: 원본 HTML
    """
    mime = MIMEMultipart("alternative")
    for key, header in _HEADERS:
        if message.get(key):
            mime[header] = message[key]

    html = message.get("html") or ""
    mime.attach(MIMEText(md(html).strip(), "plain", "utf-8"))
    mime.attach(MIMEText(html, "html", "utf-8"))
    return mime


def encode_raw(mime: MIMEMultipart) -> str:
    """Gmail API용 URL-safe base64."""
    return base64.urlsafe_b64encode(mime.as_bytes()).decode()


def _envelope(message: Dict) -> Dict:
    recipients = []
    for key in ("to", "cc", "bcc"):
        if message.get(key):
            recipients.extend(a.strip() for a in message[key].split(","))
    return {"from": message.get("from"), "to": recipients}


# =========================
# 전송
# =========================
class GmailTransport:
    """Gmail API 위에서 메시지 하나씩 비동기로 보내는 트랜스포트."""

    def __init__(self, creds: Credentials, user_id: str = "me"):
        self.creds = creds
        self.user_id = user_id
        self._service = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gmail-send")

    @property
    def service(self):
        """Gmail API 서비스 (lazy)."""
        if self._service is None:
            self._service = build("gmail", "v1", credentials=self.creds, cache_discovery=False)
        return self._service

    def send_mail(self, message: Dict, callback: SendCallback) -> None:
        """전송을 워커 스레드에 넘기고 즉시 반환. 완료 시 callback(error, info)."""
        self._executor.submit(self._deliver, message, callback)

    def _deliver(self, message: Dict, callback: SendCallback) -> None:
        try:
            raw = encode_raw(build_mime_message(message))
            result = self.service.users().messages().send(
                userId=self.user_id, body={"raw": raw}
            ).execute()
        except Exception as e:
            callback(e, None)
            return
        callback(None, {
            "messageId": result.get("id"),
            "threadId": result.get("threadId"),
            "labelIds": result.get("labelIds", []),
            "envelope": _envelope(message),
        })

    def verify(self) -> str:
        """인증된 계정의 이메일 주소."""
        profile = self.service.users().getProfile(userId=self.user_id).execute()
        return profile.get("emailAddress", "")

    def close(self) -> None:
        self._executor.shutdown(wait=True)


def make_credentials(auth: Dict) -> Credentials:
    """OAuth2 auth 블록 → google Credentials (네트워크 호출 없음)."""
    return Credentials(
        token=auth["access_token"],
        refresh_token=auth["refresh_token"],
        client_id=auth["client_id"],
        client_secret=auth["client_secret"],
        token_uri=auth.get("token_uri") or GMAIL_TOKEN_URI,
        scopes=SCOPES,
    )


def create_transport(config: Dict) -> GmailTransport:
    """
    트랜스포트 팩토리.
        config = {"service": "gmail",
                  "auth": {"type": "OAuth2", "user": ..., "client_id": ...,
                           "client_secret": ..., "access_token": ..., "refresh_token": ...}}
    """
    if config.get("service") != SERVICE_NAME:
        raise ConfigurationError(f"Unsupported mail service: {config.get('service')!r}")
    auth = config.get("auth") or {}
    if auth.get("type") != AUTH_TYPE:
        raise ConfigurationError(f"Unsupported auth type: {auth.get('type')!r}")
    return GmailTransport(make_credentials(auth))
