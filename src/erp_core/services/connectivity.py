"""
Backend connectivity check.

Pings the hosted backend's health endpoint; the result is only displayed,
never acted upon.
"""

import asyncio

import aiohttp
from loguru import logger

from ..auth.models import ConnectionStatus
from ..config import DEFAULT_CONNECTIVITY_TIMEOUT


async def check_connection(
    url: str,
    timeout: float = DEFAULT_CONNECTIVITY_TIMEOUT,
) -> ConnectionStatus:
    """
    Check that the backend answers.

    Args:
        url: Health endpoint URL
        timeout: Total request timeout in seconds

    Returns:
        ConnectionStatus; ``success`` is False on any HTTP error status,
        network failure or timeout
    """
    try:
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as session:
            async with session.get(url) as response:
                if response.status >= 400:
                    return ConnectionStatus(
                        success=False,
                        message=f"HTTP {response.status} from {url}",
                    )
                logger.debug(f"Backend reachable: {url}")
                return ConnectionStatus(success=True)
    except asyncio.TimeoutError:
        return ConnectionStatus(success=False, message=f"Timed out after {timeout}s")
    except aiohttp.ClientError as e:
        return ConnectionStatus(success=False, message=str(e) or type(e).__name__)
