"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so a caller's request can be correlated with
    the store operations it caused.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        user_id: Identifier of the user on whose behalf the call runs.
        application_id: Identifier of the calling Application (if any).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", user_id="...")
        probe = DefaultRepositoryProbe(entity="application").with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    application_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.application_id is not None:
            result["application_id"] = self.application_id
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Return a copy with additional metadata merged in."""
        return ObservationContext(
            request_id=self.request_id,
            user_id=self.user_id,
            application_id=self.application_id,
            extra={**self.extra, **kwargs},
        )
