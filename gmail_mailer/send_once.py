# gmail_mailer/send_once.py
from __future__ import annotations
import argparse
import sys
from concurrent.futures import TimeoutError as FutureTimeout

from rich import print

from .config import MAIL_BCC, MAIL_CC, MAIL_SENDER, MAIL_TO, SEND_TIMEOUT_SEC
from .errors import MailerError
from .mail_client import MailClient

EXIT_UNKNOWN = 2


def _addresses(values, default):
    """--to a@x.com,b@x.com --to c@x.com → [a, b, c]. 없으면 config 기본값."""
    if not values:
        return list(default)
    return [e.strip() for v in values for e in v.split(",") if e.strip()]


def _read_content(args) -> str:
    if args.html_file:
        with open(args.html_file, "r", encoding="utf-8") as f:
            return f.read()
    return args.html


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one email through Gmail (OAuth2)")
    parser.add_argument("--sender", default=MAIL_SENDER, help="From address")
    parser.add_argument("--to", action="append", help="Direct recipient(s), comma separated")
    parser.add_argument("--cc", action="append", help="Carbon copy recipient(s)")
    parser.add_argument("--bcc", action="append", help="Blind carbon copy recipient(s)")
    parser.add_argument("--subject", required=True)
    body = parser.add_mutually_exclusive_group(required=True)
    body.add_argument("--html", help="HTML body")
    body.add_argument("--html-file", help="Path to a file holding the HTML body")
    parser.add_argument("--timeout", type=int, default=SEND_TIMEOUT_SEC, help="Seconds to wait")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    recipients = {
        "to": _addresses(args.to, MAIL_TO),
        "cc": _addresses(args.cc, MAIL_CC),
        "bcc": _addresses(args.bcc, MAIL_BCC),
    }

    try:
        client = MailClient.from_env()
        print(f"[cyan]SEND: {args.subject} -> {', '.join(recipients['to']) or '(none)'}[/cyan]")
        future = client.send_email(args.sender, recipients, args.subject, _read_content(args))
        result = future.result(timeout=args.timeout)
    except MailerError as e:
        print(f"[red]SEND: failed -> {e}[/red]")
        return 1
    except FutureTimeout:
        # 전송은 워커 스레드에서 계속됨
        print(f"[yellow]SEND: still sending after {args.timeout}s, result unknown[/yellow]")
        return EXIT_UNKNOWN

    print(f"[green]SEND: done (id {result.message_id})[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
