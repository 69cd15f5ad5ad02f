"""
Pacing and retry utilities for outbound calls.

This module provides:
- Pacer, a fixed inter-call delay used as backpressure against upstream rate limits
- RetryPolicy and retry_async, exponential backoff for transient failures

Both take an injectable ``sleep`` coroutine so tests never wait in real time.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

T = TypeVar('T')

Sleep = Callable[[float], Awaitable[None]]


class Pacer:
    """
    Waits a fixed delay before each outbound call.
    
    Example:
        pacer = Pacer(delay=3.0)
        
        for prompt in prompts:
            await pacer.wait()
            await client.check(path, prompt)
    """
    
    def __init__(self, delay: float, sleep: Sleep = asyncio.sleep):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.delay = delay
        self._sleep = sleep
    
    async def wait(self) -> None:
        if self.delay > 0:
            logger.debug(f"Pacing outbound call: sleeping {self.delay:.1f}s")
            await self._sleep(self.delay)


class RetryPolicy(BaseModel):
    """Exponential backoff parameters. ``max_attempts=1`` disables retrying."""
    
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
    
    max_attempts: int = Field(default=1, ge=1)
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    
    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given zero-based failed attempt."""
        return min(self.base_delay * (self.exponential_base ** attempt), self.max_delay)


async def retry_async(
    func: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """
    Await ``func`` with exponential backoff retry.
    
    Args:
        func: Zero-argument coroutine function to execute
        policy: Retry parameters
        sleep: Coroutine used to wait between attempts
    
    Returns:
        Result of the first successful attempt
    
    Raises:
        The last exception once attempts are exhausted, or immediately for
        exceptions not listed in ``policy.retry_on``.
    """
    name = getattr(func, "__name__", repr(func))
    
    for attempt in range(policy.max_attempts):
        try:
            result = await func()
            
            if attempt > 0:
                logger.info(f"{name} succeeded on attempt {attempt + 1}/{policy.max_attempts}")
            
            return result
        
        except policy.retry_on as e:
            if attempt == policy.max_attempts - 1:
                if policy.max_attempts > 1:
                    logger.error(f"{name} failed after {policy.max_attempts} attempts: {e}")
                raise
            
            delay = policy.delay_for(attempt)
            logger.warning(
                f"{name} failed on attempt {attempt + 1}/{policy.max_attempts}: {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            await sleep(delay)
    
    # max_attempts >= 1 guarantees the loop returns or raises
    raise RuntimeError("retry loop exited without a result")
