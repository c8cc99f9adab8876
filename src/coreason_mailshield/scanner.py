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
Scanner module for heuristic PII detection in email bodies.

Each PIICategory is backed by a Presidio PatternRecognizer. Recognizers hold
no per-call match state, so scans never leak cursor positions between calls.
The patterns are deliberately simple and incomplete: names, addresses and
international formats are not detected.
"""

from typing import Any, Dict, List, Optional, Tuple, cast

from presidio_analyzer import Pattern, PatternRecognizer, RecognizerResult

from coreason_mailshield.models import PIIAnalysis, PIICategory

# Order matters: a later category never sees text already replaced by an earlier one.
# Sensitive URLs go first so an address in a query string stays inside the URL token.
PII_PATTERNS: List[Tuple[PIICategory, str]] = [
    (PIICategory.SENSITIVE_URL, r"(?i)https?://[^\s]+(?:token|key|password|auth|session|api|login)[^\s]*"),
    (PIICategory.EMAIL, r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
    (PIICategory.PHONE, r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"),
    (PIICategory.ORDER_NUMBER, r"(?i)#[0-9A-Z]{6,}"),
    (PIICategory.CREDIT_CARD, r"\b(?:\d[ -]*?){13,19}\b"),
    (PIICategory.SSN, r"\b\d{3}-\d{2}-\d{4}\b"),
    (PIICategory.IP_ADDRESS, r"\b(?:\d{1,3}\.){3}\d{1,3}\b"),
    (PIICategory.ACCOUNT_NUMBER, r"(?i)\b(?:acc?t?#?|account#?)\s*:?\s*[0-9A-Z]{6,}\b"),
    (PIICategory.DRIVER_LICENSE, r"\b[A-Z]{1,2}[0-9]{6,8}\b"),
]

_ANALYSIS_FIELDS: Dict[PIICategory, str] = {
    PIICategory.SENSITIVE_URL: "has_sensitive_url",
    PIICategory.EMAIL: "has_email",
    PIICategory.PHONE: "has_phone",
    PIICategory.ORDER_NUMBER: "has_order_number",
    PIICategory.CREDIT_CARD: "has_credit_card",
    PIICategory.SSN: "has_ssn",
    PIICategory.IP_ADDRESS: "has_ip_address",
    PIICategory.ACCOUNT_NUMBER: "has_account_number",
    PIICategory.DRIVER_LICENSE: "has_driver_license",
}

_RECOGNIZERS_CACHE: Optional[Dict[PIICategory, PatternRecognizer]] = None


def _build_recognizer(category: PIICategory, regex: str) -> PatternRecognizer:
    """
    Wraps a single category regex in a PatternRecognizer.

    Presidio defaults to case-insensitive matching; that is switched off here so
    that each pattern carries its own (?i) where it wants it.
    """
    pattern = Pattern(name=f"{category.value.lower()}_pattern", regex=regex, score=0.5)
    return PatternRecognizer(
        supported_entity=category.value,
        patterns=[pattern],
        global_regex_flags=0,
    )


def _get_recognizers() -> Dict[PIICategory, PatternRecognizer]:
    """
    Returns the shared category → recognizer table, building it on first use.

    The table preserves PII_PATTERNS order.
    """
    global _RECOGNIZERS_CACHE
    if _RECOGNIZERS_CACHE is None:
        _RECOGNIZERS_CACHE = {category: _build_recognizer(category, regex) for category, regex in PII_PATTERNS}
    return _RECOGNIZERS_CACHE


class Scanner:
    """
    Regex-based PII detector over the fixed, ordered category list.
    """

    def __init__(self) -> None:
        self._recognizers = _get_recognizers()

    @property
    def categories(self) -> List[PIICategory]:
        """Categories in application order."""
        return list(self._recognizers)

    def scan(self, text: Optional[str], category: PIICategory) -> List[RecognizerResult]:
        """
        Finds all non-overlapping matches of one category, left to right.

        Args:
            text: The text to scan. None is treated as empty.
            category: The category to look for.

        Returns:
            RecognizerResult spans sorted by start offset.
        """
        if not text:
            return []

        recognizer = self._recognizers[category]
        results = cast(List[RecognizerResult], cast(Any, recognizer.analyze(text=text, entities=[category.value])))
        return sorted(results, key=lambda r: r.start)

    def analyze(self, text: Optional[str]) -> PIIAnalysis:
        """
        Reports which categories occur in the text without modifying it.

        Each category is scanned independently over the original text, so a
        substring can count towards more than one category.
        """
        flags: Dict[str, Any] = {}
        total = 0
        for category in self.categories:
            count = len(self.scan(text, category))
            flags[_ANALYSIS_FIELDS[category]] = count > 0
            total += count
        return PIIAnalysis(total_pii_count=total, **flags)
