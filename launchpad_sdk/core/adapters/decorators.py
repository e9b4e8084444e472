from __future__ import annotations

from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

from launchpad_sdk.core.errors import ErrorInfo, LaunchpadError, classify_error

T = TypeVar("T")


def status_tuple(
    fn: Callable[..., Coroutine[Any, Any, T]],
) -> Callable[..., Coroutine[Any, Any, tuple[bool, T | ErrorInfo]]]:
    """Wrap an async read method to return ``(True, result)`` or ``(False, ErrorInfo)``.

    The decorated function should perform its work and return the result directly.
    Exceptions are classified, logged via ``self.logger``, and never re-raised.
    """

    @wraps(fn)
    async def wrapper(
        self: Any, *args: Any, **kwargs: Any
    ) -> tuple[bool, T | ErrorInfo]:
        try:
            result = await fn(self, *args, **kwargs)
            return (True, result)
        except Exception as exc:
            error = classify_error(exc)
            if isinstance(exc, LaunchpadError):
                self.logger.warning(f"{fn.__name__} failed: {error.kind}: {error}")
            else:
                self.logger.error(f"Error in {fn.__name__}: {exc}")
            return (False, error.to_info())

    return wrapper  # type: ignore[return-value]
