"""Call user hooks that may be plain functions or coroutine functions."""

import inspect
from typing import Any, Callable


async def call_hook(hook: Callable[..., Any], *args: Any) -> Any:
    """Call ``hook`` and await the result if it is awaitable."""
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
