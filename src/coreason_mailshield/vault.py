# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

"""Per-conversation storage for redaction mappings.

This module provides the VaultManager, which serializes RedactionMappings into
a keyed cache with expiry. Every store or payload failure degrades to "no
mapping" so that redaction never blocks email processing.
"""

from typing import Optional

from pydantic import ValidationError

from coreason_mailshield.config import Settings, settings
from coreason_mailshield.models import RedactionMapping
from coreason_mailshield.store import MappingStore, TTLCacheStore
from coreason_mailshield.utils.logger import logger


class VaultManager:
    """Manages the storage and retrieval of RedactionMappings.

    One mapping is kept per conversation id. Saving a mapping replaces any
    previous mapping for the same conversation.
    """

    def __init__(
        self,
        store: Optional[MappingStore] = None,
        ttl_seconds: float = 21600,
        key_prefix: str = "redaction_",
    ) -> None:
        """Initializes the VaultManager.

        Args:
            store: Cache backend. Defaults to an in-memory TTLCacheStore.
            ttl_seconds: Expiry applied to every saved mapping. Default 6 hours.
            key_prefix: Prefix joined to the conversation id to form the cache key.
        """
        self.store: MappingStore = store if store is not None else TTLCacheStore()
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "VaultManager":
        """Builds a vault backed by a TTLCacheStore sized from settings."""
        config = config or settings
        return cls(
            store=TTLCacheStore(max_size=config.cache_max_size),
            ttl_seconds=config.cache_ttl_seconds,
            key_prefix=config.cache_key_prefix,
        )

    def cache_key(self, conversation_id: str) -> str:
        return f"{self.key_prefix}{conversation_id}"

    def save_map(self, mapping: RedactionMapping) -> bool:
        """Saves a mapping, overwriting any mapping for the same conversation.

        Args:
            mapping: The RedactionMapping to store.

        Returns:
            True if the store accepted the write, False if it failed.
        """
        try:
            self.store.put(self.cache_key(mapping.conversation_id), mapping.model_dump_json(), self.ttl_seconds)
        except Exception as e:
            logger.warning(f"Failed to store redaction mapping for conversation {mapping.conversation_id}: {e}")
            return False
        logger.info(
            f"Stored redaction mapping for conversation {mapping.conversation_id}. "
            f"Tokens: {len(mapping.mappings)}"
        )
        return True

    def get_map(self, conversation_id: str) -> Optional[RedactionMapping]:
        """Retrieves the mapping for a conversation.

        Args:
            conversation_id: The conversation identifier.

        Returns:
            The RedactionMapping if present and readable, else None.
            Expired, missing, unreadable and corrupt entries all yield None.
        """
        try:
            payload = self.store.get(self.cache_key(conversation_id))
        except Exception as e:
            logger.warning(f"Failed to read redaction mapping for conversation {conversation_id}: {e}")
            return None

        if not payload:
            return None

        try:
            mapping = RedactionMapping.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(
                f"Discarding unreadable redaction mapping for conversation {conversation_id}: "
                f"{e.error_count()} validation error(s)"
            )
            return None

        logger.info(f"Retrieved redaction mapping for conversation {conversation_id}. Tokens: {len(mapping.mappings)}")
        return mapping

    def delete_map(self, conversation_id: str) -> None:
        """Deletes the mapping for a conversation. No-op when absent.

        Args:
            conversation_id: The conversation id to remove.
        """
        try:
            self.store.remove(self.cache_key(conversation_id))
        except Exception as e:
            logger.warning(f"Failed to clear redaction mapping for conversation {conversation_id}: {e}")
            return
        logger.info(f"Cleared redaction mapping for conversation {conversation_id}")
