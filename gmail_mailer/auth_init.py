from __future__ import annotations
import sys

from google_auth_oauthlib.flow import InstalledAppFlow
from rich import print

from .config import GOOGLE_CREDENTIALS_FILE
from .transport import SCOPES, GmailTransport


def obtain_credentials(credentials_file: str):
    """브라우저 OAuth 플로우로 refresh token 포함 자격 증명 발급."""
    print("[cyan]Launching browser for Gmail OAuth…[/cyan]")
    flow = InstalledAppFlow.from_client_secrets_file(credentials_file, SCOPES)
    return flow.run_local_server(port=0, access_type="offline", prompt="consent")


def env_lines(user: str, creds) -> list[str]:
    return [
        f"GMAIL_OAUTH_USER={user}",
        f"GMAIL_OAUTH_CLIENT_ID={creds.client_id}",
        f"GMAIL_OAUTH_CLIENT_SECRET={creds.client_secret}",
        f"GMAIL_OAUTH_ACCESS_TOKEN={creds.token}",
        f"GMAIL_OAUTH_REFRESH_TOKEN={creds.refresh_token}",
    ]


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    credentials_file = args[0] if args else GOOGLE_CREDENTIALS_FILE

    creds = obtain_credentials(credentials_file)
    transport = GmailTransport(creds)
    try:
        user = transport.verify()
    finally:
        transport.close()
    print("Authenticated as:", user)

    if not creds.refresh_token:
        print("[yellow]No refresh token returned; revoke app access and run again.[/yellow]")

    print("[green]Put these in your .env:[/green]")
    for line in env_lines(user, creds):
        print(line)


if __name__ == "__main__":
    main()
