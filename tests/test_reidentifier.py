# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

from typing import Dict

import pytest

from coreason_mailshield.models import RedactionMapping
from coreason_mailshield.reidentifier import ReIdentifier
from coreason_mailshield.vault import VaultManager


@pytest.fixture
def reidentifier(vault: VaultManager) -> ReIdentifier:
    return ReIdentifier(vault)


def _save(vault: VaultManager, conversation_id: str, mappings: Dict[str, str]) -> None:
    vault.save_map(RedactionMapping(conversation_id=conversation_id, mappings=mappings))


def test_reidentify_success(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    _save(vault, "thread-1", {"{{token0}}": "john.doe@example.com"})

    result = reidentifier.reidentify("Contact {{token0}}", "thread-1")
    assert result == "Contact john.doe@example.com"


def test_reidentify_no_map(reidentifier: ReIdentifier) -> None:
    text = "Hello {{token0}}."
    assert reidentifier.reidentify(text, "thread-missing") == text


@pytest.mark.parametrize("text", ["", None])
def test_reidentify_empty_text(reidentifier: ReIdentifier, text: str) -> None:
    assert reidentifier.reidentify(text, "thread-1") == ""


def test_reidentify_blank_conversation_id(reidentifier: ReIdentifier) -> None:
    assert reidentifier.reidentify("Hello {{token0}}", "") == "Hello {{token0}}"


def test_reidentify_empty_mappings(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    _save(vault, "thread-empty", {})
    assert reidentifier.reidentify("Hello {{token0}}.", "thread-empty") == "Hello {{token0}}."


def test_reidentify_repeated_token(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    _save(vault, "thread-2", {"{{token0}}": "Alice"})

    result = reidentifier.reidentify("Dear {{token0}}, thanks {{token0}}!", "thread-2")
    assert result == "Dear Alice, thanks Alice!"


def test_reidentify_prefix_tokens(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    mappings = {f"{{{{token{i}}}}}": f"v{i}" for i in range(12)}
    _save(vault, "thread-3", mappings)

    result = reidentifier.reidentify("{{token10}} {{token1}} {{token11}}", "thread-3")
    assert result == "v10 v1 v11"


def test_reidentify_leaves_malformed_tokens(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    _save(vault, "thread-4", {"{{token0}}": "Alice"})

    text = "Hi {{token0 and {{ token0 }} and {token0} and {{token00}}"
    assert reidentifier.reidentify(text, "thread-4") == text


def test_reidentify_unknown_tokens_stay_literal(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    _save(vault, "thread-5", {"{{token0}}": "Alice"})

    result = reidentifier.reidentify("{{token0}} met {{token7}}", "thread-5")
    assert result == "Alice met {{token7}}"


def test_reidentify_does_not_rescan_values(reidentifier: ReIdentifier, vault: VaultManager) -> None:
    _save(vault, "thread-6", {"{{token0}}": "see {{token1}}", "{{token1}}": "Bob"})

    result = reidentifier.reidentify("{{token0}} / {{token1}}", "thread-6")
    assert result == "see {{token1}} / Bob"
