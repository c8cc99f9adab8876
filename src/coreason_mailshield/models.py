# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

"""
Data models for the CoReason Mailshield redaction layer.

This module defines the PII categories, the analysis report returned by
`analyze`, the result of a redaction pass (RedactionResult) and the
per-conversation mapping persisted in the vault (RedactionMapping).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field

PII_DISCLAIMER = "WARNING: This PII detection is INCOMPLETE and may miss many forms of personal data"


class PIICategory(str, Enum):
    """
    Heuristic PII categories, in the order they are applied during redaction.

    Attributes:
        SENSITIVE_URL: URL carrying a token, key, password, session or login marker.
        EMAIL: Email address.
        PHONE: US-style phone number.
        ORDER_NUMBER: Order or tracking reference such as #A1B2C3.
        CREDIT_CARD: Any 13-19 digit run (no checksum validation).
        SSN: US Social Security Number shape (123-45-6789).
        IP_ADDRESS: Dotted quad.
        ACCOUNT_NUMBER: Value following an "acct"/"account" marker.
        DRIVER_LICENSE: One or two capitals followed by 6-8 digits.
    """

    SENSITIVE_URL = "SENSITIVE_URL"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    ORDER_NUMBER = "ORDER_NUMBER"
    CREDIT_CARD = "CREDIT_CARD"
    SSN = "SSN"
    IP_ADDRESS = "IP_ADDRESS"
    ACCOUNT_NUMBER = "ACCOUNT_NUMBER"
    DRIVER_LICENSE = "DRIVER_LICENSE"


class PIIAnalysis(BaseModel):
    """
    Read-only report of which PII categories occur in a text.

    `total_pii_count` is the sum of per-category match counts, each category
    scanned independently over the original text.
    """

    has_email: bool = False
    has_phone: bool = False
    has_order_number: bool = False
    has_credit_card: bool = False
    has_ssn: bool = False
    has_sensitive_url: bool = False
    has_ip_address: bool = False
    has_account_number: bool = False
    has_driver_license: bool = False
    total_pii_count: int = 0
    disclaimer: str = PII_DISCLAIMER


class RedactionResult(BaseModel):
    """
    Outcome of a single redaction pass.

    Attributes:
        redacted_text: The input with every match replaced by a token.
        mapping: Token (key) to original substring (value) for this pass.
        redaction_count: Number of substitutions, equal to len(mapping).
    """

    redacted_text: str = ""
    mapping: Dict[str, str] = Field(default_factory=dict)
    redaction_count: int = 0


class RedactionMapping(BaseModel):
    """
    Stored form of a redaction pass, keyed by conversation.

    Attributes:
        conversation_id: Opaque conversation key, typically an email thread id.
        mappings: Dictionary mapping tokens (keys) to real values (values).
        created_at: Timestamp of creation.
    """

    conversation_id: str
    mappings: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
