# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

import re
from typing import Dict, List, Optional

from coreason_mailshield.models import RedactionMapping, RedactionResult
from coreason_mailshield.scanner import Scanner
from coreason_mailshield.vault import VaultManager

# Wire format shared with the AI prompts: {{token<N>}}, N without leading zeros.
TOKEN_PATTERN = re.compile(r"\{\{token(0|[1-9][0-9]*)\}\}")


def format_token(index: int) -> str:
    """Returns the placeholder for the given zero-based index."""
    if index < 0:
        raise ValueError("Token index must be non-negative")
    return "{{token%d}}" % index


def find_tokens(text: Optional[str]) -> List[str]:
    """Returns every well-formed token in text, in order of appearance."""
    if not text:
        return []
    return [m.group(0) for m in TOKEN_PATTERN.finditer(text)]


def expand_tokens(text: str, mapping: Dict[str, str]) -> str:
    """Replaces each mapped token in text with its value in a single left-to-right pass.

    Inserted values are not rescanned, and tokens absent from the mapping are left as-is.
    """
    return TOKEN_PATTERN.sub(lambda m: mapping.get(m.group(0), m.group(0)), text)


class MaskingEngine:
    """
    Replaces detected PII with positional tokens and records the mapping.
    """

    def __init__(self, vault: VaultManager, scanner: Optional[Scanner] = None) -> None:
        self.vault = vault
        self.scanner = scanner or Scanner()

    def mask(self, text: Optional[str], conversation_id: Optional[str]) -> RedactionResult:
        """
        Tokenizes the text and stores the mapping under the conversation id.

        Categories run one after another, each over the output of the previous
        substitution. Token numbering starts at 0 on every call, and a stored
        mapping for the same conversation is replaced, not merged. Nothing is
        stored when no PII was found or the conversation id is empty.
        """
        working = text or ""
        mapping: Dict[str, str] = {}
        # Token-shaped text already in the email keeps its meaning: those indices are never issued.
        reserved = set(find_tokens(working))
        next_index = 0

        for category in self.scanner.categories:
            matches = self.scanner.scan(working, category)
            if not matches:
                continue

            pieces: List[str] = []
            cursor = 0
            for match in matches:
                token = format_token(next_index)
                while token in reserved:
                    next_index += 1
                    token = format_token(next_index)
                next_index += 1
                mapping[token] = expand_tokens(working[match.start : match.end], mapping)
                pieces.append(working[cursor : match.start])
                pieces.append(token)
                cursor = match.end
            pieces.append(working[cursor:])
            working = "".join(pieces)

        if mapping and conversation_id:
            self.vault.save_map(RedactionMapping(conversation_id=conversation_id, mappings=mapping))

        return RedactionResult(redacted_text=working, mapping=mapping, redaction_count=len(mapping))
