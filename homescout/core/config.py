"""homescout configuration loaded from environment variables.

Azure Functions app settings (or ``local.settings.json`` for local dev)
are the source of truth.

``from_env()`` raises ``ConfigValidationError`` if any value is out of
its valid range, so bad configuration fails at startup rather than on
the first tool call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from homescout.core.constants import (
    BLOB_STORE,
    DEFAULT_CONVERSATION_TTL_SECONDS,
    DEFAULT_DATASET_CONTAINER,
    DEFAULT_MAX_CONVERSATIONS,
    MEMORY_STORE,
)
from homescout.core.exceptions import HomescoutError

_STORE_BACKENDS = frozenset({MEMORY_STORE, BLOB_STORE})


class ConfigValidationError(HomescoutError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Full error message, including the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class HomescoutConfig:
    """Immutable service configuration.

    Attributes:
        dataset_store: Dataset store backend (``memory`` or ``blob``).
        dataset_container: Blob container for persisted datasets.
        conversation_ttl_seconds: Idle time after which a conversation's
            datasets are evicted.
        max_conversations: Maximum number of conversations held at once.
    """

    dataset_store: str = MEMORY_STORE
    dataset_container: str = DEFAULT_DATASET_CONTAINER
    conversation_ttl_seconds: int = DEFAULT_CONVERSATION_TTL_SECONDS
    max_conversations: int = DEFAULT_MAX_CONVERSATIONS

    @classmethod
    def from_env(cls) -> HomescoutConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``MAX_CONVERSATIONS=abc``).
        """
        config = cls(
            dataset_store=os.getenv("DATASET_STORE", MEMORY_STORE).strip().lower(),
            dataset_container=os.getenv("DATASET_CONTAINER", DEFAULT_DATASET_CONTAINER),
            conversation_ttl_seconds=int(
                os.getenv("CONVERSATION_TTL_SECONDS", str(DEFAULT_CONVERSATION_TTL_SECONDS))
            ),
            max_conversations=int(os.getenv("MAX_CONVERSATIONS", str(DEFAULT_MAX_CONVERSATIONS))),
        )
        _validate(config)
        return config


def _validate(config: HomescoutConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.dataset_store not in _STORE_BACKENDS:
        raise ConfigValidationError(
            "DATASET_STORE",
            config.dataset_store,
            f"must be one of {', '.join(sorted(_STORE_BACKENDS))}",
        )

    if not config.dataset_container:
        raise ConfigValidationError(
            "DATASET_CONTAINER",
            config.dataset_container,
            "must not be empty",
        )

    if config.conversation_ttl_seconds <= 0:
        raise ConfigValidationError(
            "CONVERSATION_TTL_SECONDS",
            config.conversation_ttl_seconds,
            "must be > 0 (seconds)",
        )

    if config.max_conversations <= 0:
        raise ConfigValidationError(
            "MAX_CONVERSATIONS",
            config.max_conversations,
            "must be > 0",
        )
