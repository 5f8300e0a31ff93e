# gmail_mailer/errors.py
from __future__ import annotations


class MailerError(Exception):
    """Base exception for all mailer errors."""


class ConfigurationError(MailerError, ValueError):
    """A credential or transport setting is missing or invalid."""


class ValidationError(MailerError, ValueError):
    """A required send parameter is missing."""


class DeliveryError(MailerError):
    """The transport reported that the message could not be sent."""

    def __init__(self, message: str, detail=None):
        self.detail = detail
        super().__init__(message)
