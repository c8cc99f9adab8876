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
Re-identification module for reversing tokenization.

This module replaces tokens in the AI response with the original values
recorded for the conversation.
"""

from typing import Optional

from coreason_mailshield.masking import expand_tokens
from coreason_mailshield.vault import VaultManager


class ReIdentifier:
    """
    Handles the reversal of tokenization (re-identification).
    """

    def __init__(self, vault: VaultManager) -> None:
        """
        Initializes the ReIdentifier.

        Args:
            vault: The VaultManager instance to retrieve mappings from.
        """
        self.vault = vault

    def reidentify(self, text: Optional[str], conversation_id: Optional[str]) -> str:
        """
        Replaces every occurrence of each mapped token with its original value.

        Args:
            text: The text containing tokens.
            conversation_id: The conversation identifier used at redaction time.

        Returns:
            The text with real values restored, or the text unchanged when no
            mapping exists (never redacted, expired or cleared).
        """
        if not text:
            return ""

        if not conversation_id:
            return text

        deid_map = self.vault.get_map(conversation_id)
        if not deid_map or not deid_map.mappings:
            return text

        return expand_tokens(text, deid_map.mappings)
