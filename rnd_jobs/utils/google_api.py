"""
Bounded calls into the synchronous Google client libraries.

gspread and google-auth block on HTTP, so each call runs in a worker thread.
A thread cannot be cancelled: on timeout the caller still waits for it to
end before the error is raised, so whatever lock the caller holds is only
released once the thread has stopped touching the sheet.
"""

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class GoogleAPITimeoutError(Exception):
    """A Google call did not finish within its timeout."""
    pass


async def execute_with_timeout(
    api_call: Callable[[], Any],
    timeout: float = 10.0,
    operation: str = "Google API call"
) -> Any:
    """
    Run a zero-argument blocking callable in a thread.

    Raises:
        GoogleAPITimeoutError: the call outlived timeout seconds (raised after
            the thread has finished)
        Exception: whatever the call itself raised within the timeout
    """
    call = asyncio.ensure_future(asyncio.to_thread(api_call))
    done, _ = await asyncio.wait({call}, timeout=timeout)
    if call in done:
        return call.result()

    message = f"{operation} exceeded {timeout}s"
    logger.error(f"{message}; waiting for the worker thread to finish")
    try:
        await call
    except Exception as e:
        logger.warning(f"{operation} failed after timing out: {e}")
    raise GoogleAPITimeoutError(message)
