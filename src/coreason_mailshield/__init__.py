# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

"""Reversible PII redaction for AI-assisted email replies."""

from coreason_mailshield.main import Redactor, analyze, clear, get_redactor, redact, restore
from coreason_mailshield.models import PIIAnalysis, PIICategory, RedactionMapping, RedactionResult
from coreason_mailshield.store import MappingStore, TTLCacheStore
from coreason_mailshield.vault import VaultManager

__all__ = [
    "Redactor",
    "analyze",
    "redact",
    "restore",
    "clear",
    "get_redactor",
    "PIIAnalysis",
    "PIICategory",
    "RedactionMapping",
    "RedactionResult",
    "MappingStore",
    "TTLCacheStore",
    "VaultManager",
]
__version__ = "0.1.0"
