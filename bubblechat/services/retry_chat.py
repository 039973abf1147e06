"""Retry wrapper for chat capabilities."""

import asyncio
import logging
import random
from dataclasses import dataclass

import httpx

from ..core.chat_types import ChatCapability, ChatContent, ChatReply
from ..core.errors import ChatBackendError, TransientBackendError

LOGGER = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryConfig:
    """Backoff settings for RetryChat. Durations are in seconds."""

    max_attempts: int = 3
    initial_backoff: float = 10.0
    max_backoff: float = 60.0
    backoff_factor: float = 2.0
    jitter: bool = True

    def delay_for(self, attempt: int) -> float:
        """Delay before retrying after the given (1-based) failed attempt."""
        delay = min(
            self.max_backoff,
            self.initial_backoff * (self.backoff_factor ** (attempt - 1)),
        )
        if self.jitter:
            delay = random.uniform(delay / 2, delay)
        return delay


def is_transient(error: BaseException) -> bool:
    """Return True for failures worth retrying (throttling, 5xx, network)."""
    if isinstance(error, ChatBackendError):
        return error.status_code in TRANSIENT_STATUS_CODES
    return isinstance(
        error, (httpx.TransportError, ConnectionError, TimeoutError, asyncio.TimeoutError)
    )


class RetryChat:
    """Wraps a chat capability and retries transient failures.

    Non-transient errors are re-raised on the first attempt. When every
    attempt fails transiently a TransientBackendError is raised.
    """

    def __init__(self, chat: ChatCapability, config: RetryConfig = RetryConfig()):
        self.chat = chat
        self.config = config

    async def send(self, content: ChatContent) -> ChatReply:
        last_error: BaseException = RuntimeError("no attempts made")
        for attempt in range(1, self.config.max_attempts + 1):
            try:
                return await self.chat.send(content)
            except Exception as e:  # noqa: BLE001
                if not is_transient(e):
                    raise
                last_error = e

            if attempt < self.config.max_attempts:
                delay = self.config.delay_for(attempt)
                LOGGER.warning(
                    "Transient chat failure (attempt %d/%d): %s; retrying in %.1fs",
                    attempt,
                    self.config.max_attempts,
                    last_error,
                    delay,
                )
                await asyncio.sleep(delay)

        raise TransientBackendError(
            f"Giving up after {self.config.max_attempts} attempts: {last_error}",
            attempts=self.config.max_attempts,
            status_code=getattr(last_error, "status_code", None),
        ) from last_error
