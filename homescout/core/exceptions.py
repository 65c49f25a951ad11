"""Unified tool exception taxonomy.

Every domain exception inherits from ``HomescoutError`` and carries
structured context fields so the HTTP layer and the tool executor can
report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``: bad tool arguments or request input, never retryable.
- ``TransientError``: temporary failures (dataset store I/O), retryable.
- ``PermanentError``: unrecoverable domain failures, not retryable.
- ``ContractError``: request/payload shape drift, never retryable.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for HTTP responses and logging.
"""

from __future__ import annotations


class HomescoutError(Exception):
    """Base exception for all homescout-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"find_place"``, ``"ingress"``).
        code: Machine-readable error code (e.g. ``"DATASET_NOT_FOUND"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Request/conversation correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(HomescoutError):
    """Input or argument validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(HomescoutError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(HomescoutError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(HomescoutError):
    """Request or payload shape drift. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class DatasetNotFoundError(PermanentError):
    """A required dataset name did not resolve to any features.

    Attributes:
        dataset_name: The name that failed to resolve.
    """

    default_code = "DATASET_NOT_FOUND"

    def __init__(self, dataset_name: str, message: str = "", **kwargs: object) -> None:
        self.dataset_name = dataset_name
        super().__init__(message or f"No geometries found for dataset: {dataset_name}", **kwargs)


class ToolArgumentError(ValidationError):
    """Tool arguments failed schema validation."""

    default_code = "INVALID_TOOL_ARGUMENTS"


class UnknownToolError(ValidationError):
    """The requested tool name is not registered."""

    default_stage = "registry"
    default_code = "UNKNOWN_TOOL"


class DatasetStoreError(TransientError):
    """Reading or writing the dataset store failed."""

    default_stage = "dataset_store"
    default_code = "DATASET_STORE_FAILED"
