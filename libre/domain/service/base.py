"""Base service class for domain services."""

from typing import Any, ClassVar

import logfire


class Service:
    """Base class for the sign-in domain services.

    Subclasses set ``span_prefix``; each traced operation opens a logfire span
    named ``<span_prefix>.<operation>``.
    """

    span_prefix: ClassVar[str] = "service"

    def _span(self, operation: str, **attributes: Any) -> logfire.LogfireSpan:
        return logfire.span(f"{self.span_prefix}.{operation}", **attributes)
