"""
Correlation ID context.

Manages correlation ID propagation across async boundaries using contextvars.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

from contextvars import ContextVar, Token
import uuid

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> tuple[str, Token]:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        tuple[str, Token]: The correlation ID that was set and the token to reset it
    """
    value = correlation_id or str(uuid.uuid4())
    return value, correlation_id_ctx.set(value)


def get_correlation_id() -> str:
    """Current correlation ID, or an empty string outside a request."""
    return correlation_id_ctx.get()


def reset_correlation_id(token: Token) -> None:
    correlation_id_ctx.reset(token)
