from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

correlation_id_context: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def new_correlation_id() -> str:
    return uuid4().hex


def current_correlation_id() -> Optional[str]:
    return correlation_id_context.get()


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_context.set(correlation_id)


def clear_correlation_id() -> None:
    correlation_id_context.set(None)
