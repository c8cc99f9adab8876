# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

from datetime import timezone

from coreason_mailshield.models import PII_DISCLAIMER, PIIAnalysis, PIICategory, RedactionMapping, RedactionResult


def test_category_values() -> None:
    assert PIICategory.EMAIL == "EMAIL"
    assert PIICategory.SENSITIVE_URL == "SENSITIVE_URL"
    assert len(list(PIICategory)) == 9


def test_analysis_defaults() -> None:
    analysis = PIIAnalysis()
    assert analysis.total_pii_count == 0
    assert not analysis.has_email
    assert analysis.disclaimer == PII_DISCLAIMER
    assert "INCOMPLETE" in analysis.disclaimer


def test_result_defaults() -> None:
    result = RedactionResult()
    assert result.redacted_text == ""
    assert result.mapping == {}
    assert result.redaction_count == 0


def test_mapping_created_at_is_utc() -> None:
    mapping = RedactionMapping(conversation_id="thread-1")
    assert mapping.mappings == {}
    assert mapping.created_at.tzinfo == timezone.utc


def test_mapping_json_round_trip() -> None:
    mapping = RedactionMapping(conversation_id="thread-1", mappings={"{{token0}}": "a@b.com"})
    assert RedactionMapping.model_validate_json(mapping.model_dump_json()) == mapping
