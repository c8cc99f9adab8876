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
Main entry point for the CoReason Mailshield redaction layer.

This module exposes the `Redactor` class, which sits between the email
processing pipeline and the AI service: email bodies are tokenized before
they go into a prompt, and the AI reply is restored before it becomes a draft.

Redaction is best-effort. Cache failures degrade to "no mapping" and are
never raised to the caller.
"""

from typing import Callable, List, Optional, Sequence

from coreason_mailshield.masking import MaskingEngine, find_tokens
from coreason_mailshield.models import PIIAnalysis, RedactionResult
from coreason_mailshield.reidentifier import ReIdentifier
from coreason_mailshield.scanner import Scanner
from coreason_mailshield.utils.logger import logger
from coreason_mailshield.vault import VaultManager


class Redactor:
    """
    The main interface for reversible PII redaction.
    Coordinates Scanner, MaskingEngine, and ReIdentifier over one VaultManager.
    """

    def __init__(self, vault: Optional[VaultManager] = None) -> None:
        """
        Initializes the Redactor.

        Args:
            vault: Mapping storage. Defaults to an in-memory vault built from settings.
        """
        self.vault = vault or VaultManager.from_settings()
        self.scanner = Scanner()
        self.masking_engine = MaskingEngine(self.vault, self.scanner)
        self.reidentifier = ReIdentifier(self.vault)

    def analyze(self, text: Optional[str]) -> PIIAnalysis:
        """
        Reports which PII categories occur in the text. Nothing is stored.
        """
        return self.scanner.analyze(text)

    def redact(self, text: Optional[str], conversation_id: Optional[str]) -> RedactionResult:
        """
        Replaces PII with {{token<N>}} placeholders.

        The token → value mapping is stored under `conversation_id` when at
        least one substitution was made, replacing any earlier mapping for
        that conversation.

        Args:
            text: The plain-text email body. None is treated as empty.
            conversation_id: Cache key, typically the email thread id.

        Returns:
            The redacted text, the mapping for this pass and the substitution count.
        """
        result = self.masking_engine.mask(text, conversation_id)

        if result.redaction_count > 0:
            if not conversation_id:
                logger.warning(
                    f"Redacted {result.redaction_count} PII token(s) without a conversation id. "
                    "The mapping was not stored and cannot be restored."
                )
            else:
                logger.info(
                    f"Redacted text for conversation {conversation_id}. Tokens: {result.redaction_count}"
                )

        return result

    def redact_batch(
        self,
        texts: Sequence[Optional[str]],
        conversation_ids: Sequence[Optional[str]],
    ) -> List[RedactionResult]:
        """
        Redacts several texts independently, one conversation id per text.

        Token numbering restarts for every text. A missing id (shorter id
        list, None or empty) means that entry's mapping is not stored.
        """
        results: List[RedactionResult] = []
        for index, text in enumerate(texts):
            conversation_id = conversation_ids[index] if index < len(conversation_ids) else None
            results.append(self.masking_engine.mask(text, conversation_id))

        logger.info(
            f"Redacted batch of {len(results)} text(s). Tokens: {sum(r.redaction_count for r in results)}"
        )
        return results

    def restore(self, text: Optional[str], conversation_id: Optional[str]) -> str:
        """
        Substitutes tokens in the AI response with the original values.

        Args:
            text: The AI response, possibly containing tokens.
            conversation_id: The id used at redaction time.

        Returns:
            The restored text, or the text unchanged if no mapping is available.
        """
        restored = self.reidentifier.reidentify(text, conversation_id)

        leftover = find_tokens(restored)
        if leftover:
            logger.info(
                f"Restored text for conversation {conversation_id}. Unresolved tokens: {len(leftover)}"
            )
        return restored

    def clear(self, conversation_id: Optional[str]) -> None:
        """
        Drops the stored mapping for a conversation. No-op when absent.
        """
        if not conversation_id:
            return
        self.vault.delete_map(conversation_id)

    def round_trip(
        self,
        text: Optional[str],
        conversation_id: str,
        generate: Callable[[str], str],
    ) -> str:
        """
        Runs one redact → generate → restore → clear cycle.

        `generate` receives the redacted text and returns the AI output. The
        mapping is cleared only after a successful restore; if `generate`
        raises, the mapping stays in the vault and the exception propagates.
        """
        result = self.redact(text, conversation_id)
        response = generate(result.redacted_text)
        restored = self.restore(response, conversation_id)
        self.clear(conversation_id)
        return restored


_DEFAULT_REDACTOR: Optional[Redactor] = None


def get_redactor() -> Redactor:
    """Returns the process-wide Redactor, creating it on first use."""
    global _DEFAULT_REDACTOR
    if _DEFAULT_REDACTOR is None:
        _DEFAULT_REDACTOR = Redactor()
    return _DEFAULT_REDACTOR


def analyze(text: Optional[str]) -> PIIAnalysis:
    """Module-level shortcut for `get_redactor().analyze`."""
    return get_redactor().analyze(text)


def redact(text: Optional[str], conversation_id: Optional[str]) -> RedactionResult:
    """Module-level shortcut for `get_redactor().redact`."""
    return get_redactor().redact(text, conversation_id)


def restore(text: Optional[str], conversation_id: Optional[str]) -> str:
    """Module-level shortcut for `get_redactor().restore`."""
    return get_redactor().restore(text, conversation_id)


def clear(conversation_id: Optional[str]) -> None:
    """Module-level shortcut for `get_redactor().clear`."""
    get_redactor().clear(conversation_id)
