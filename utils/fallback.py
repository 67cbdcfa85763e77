from typing import Callable, Optional, TypeVar
from functools import wraps

from utils.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar('T')


def with_fallback(
    fallback_func: Callable[..., T],
    exception_types: tuple = (Exception,),
    log_errors: bool = True,
    on_fallback: Optional[Callable[[Exception], None]] = None
) -> Callable:
    """Return ``fallback_func(*args, **kwargs)`` when the wrapped call raises one of ``exception_types``.

    Used at the provider boundary so that a failed lookup turns into a degraded
    value instead of an exception travelling up into the scoring code.
    ``on_fallback`` receives the swallowed exception, e.g. to count degraded calls.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except exception_types as e:
                if log_errors:
                    logger.warning(
                        f"{func.__name__} degraded to {fallback_func.__name__}",
                        extra={
                            "function": func.__name__,
                            "fallback": fallback_func.__name__,
                            "error": str(e),
                            "error_type": type(e).__name__
                        }
                    )
                if on_fallback is not None:
                    on_fallback(e)
                return fallback_func(*args, **kwargs)
        return wrapper
    return decorator
