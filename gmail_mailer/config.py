import os
from dotenv import load_dotenv

load_dotenv()


def _split_list(raw: str) -> list[str]:
    return [e.strip() for e in (raw or "").split(",") if e.strip()]


def _int_env(name: str, default: int) -> int:
    """숫자가 아니거나 0 이하이면 기본값."""
    try:
        value = int(os.getenv(name, "").strip())
    except ValueError:
        return default
    return value if value > 0 else default


GMAIL_OAUTH_USER = os.getenv("GMAIL_OAUTH_USER", "")
GMAIL_OAUTH_CLIENT_ID = os.getenv("GMAIL_OAUTH_CLIENT_ID", "")
GMAIL_OAUTH_CLIENT_SECRET = os.getenv("GMAIL_OAUTH_CLIENT_SECRET", "")
GMAIL_OAUTH_ACCESS_TOKEN = os.getenv("GMAIL_OAUTH_ACCESS_TOKEN", "")
GMAIL_OAUTH_REFRESH_TOKEN = os.getenv("GMAIL_OAUTH_REFRESH_TOKEN", "")
GMAIL_TOKEN_URI = os.getenv("GMAIL_TOKEN_URI", "").strip() or "https://oauth2.googleapis.com/token"

GOOGLE_CREDENTIALS_FILE = os.getenv("GOOGLE_CREDENTIALS_FILE", "credentials.json")

MAIL_SENDER = os.getenv("MAIL_SENDER", "").strip() or GMAIL_OAUTH_USER
MAIL_TO = _split_list(os.getenv("MAIL_TO", ""))
MAIL_CC = _split_list(os.getenv("MAIL_CC", ""))
MAIL_BCC = _split_list(os.getenv("MAIL_BCC", ""))

SEND_TIMEOUT_SEC = _int_env("SEND_TIMEOUT_SEC", 60)
