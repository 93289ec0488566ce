"""Asyncio-aware helper for running blocking filesystem work off the event loop."""
from __future__ import annotations

import asyncio
import functools
from concurrent.futures import Executor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


async def run_blocking(
    func: Callable[..., T], *args: Any, executor: Optional[Executor] = None, **kwargs: Any
) -> T:
    """Run ``func`` in ``executor`` (the loop default when ``None``) and await the result.

    Callers await each call before issuing the next one, so work stays sequential.
    """

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, functools.partial(func, *args, **kwargs))
