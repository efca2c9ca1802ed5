"""
DijiBill Compliance - Exceptions
==================================
Structured errors for the ZATCA encoder.

Validation errors are data-completeness problems. They are raised
synchronously and never retried; the caller decides how to tell the user.
"""

from __future__ import annotations


class ReasonCode:
    """
    Known compliance error codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    SELLER_NAME_REQUIRED = "SELLER_NAME_REQUIRED"
    TIMESTAMP_REQUIRED = "TIMESTAMP_REQUIRED"
    INVOICE_TOTAL_REQUIRED = "INVOICE_TOTAL_REQUIRED"
    VALUE_TOO_LONG = "VALUE_TOO_LONG"
    TLV_MALFORMED = "TLV_MALFORMED"


class ComplianceError(Exception):
    """Base error for compliance encoding operations."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ValidationError(ComplianceError):
    """A mandatory ZATCA field is empty or a value cannot be encoded."""

    def __init__(self, code: str, message: str, field_name: str = ""):
        self.field_name = field_name
        super().__init__(code, message)


class TLVDecodeError(ComplianceError):
    """A TLV payload is truncated or not valid UTF-8."""

    def __init__(self, message: str, position: int = 0):
        self.position = position
        super().__init__(ReasonCode.TLV_MALFORMED, message)
