import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from .errors import ConfigError, ResponsePendingError
from .text import is_blank
from .types import ROLE_ASSISTANT, ClassificationResult, ConversationMessage

logger = logging.getLogger(__name__)

ClassifyFn = Callable[[str], Optional[ClassificationResult]]
SleepFn = Callable[[float], Awaitable[None]]


class ResponseScheduler:
    """Delivers classifications after a simulated "thinking" delay.

    One scheduler serves one conversation and allows a single pending
    response at a time. The delay is drawn again on every call and is the
    whole latency of a turn; there is no separate timeout.
    """

    def __init__(
        self,
        classify: ClassifyFn,
        min_delay_ms: float,
        max_delay_ms: float,
        rng: Optional[random.Random] = None,
        sleep: Optional[SleepFn] = None,
    ) -> None:
        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ConfigError(f"Invalid scheduler delay range: {min_delay_ms}..{max_delay_ms} ms")
        self._classify = classify
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self._rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def next_delay(self) -> float:
        """Next delay in seconds."""
        return self._rng.uniform(self.min_delay_ms, self.max_delay_ms) / 1000.0

    async def respond(self, text: str) -> Optional[ClassificationResult]:
        if is_blank(text):
            return None
        if self._pending:
            raise ResponsePendingError("A response is already pending for this conversation")

        self._pending = True
        try:
            delay = self.next_delay()
            logger.debug("Responding in %.3fs", delay)
            await self._sleep(delay)
            return self._classify(text)
        finally:
            self._pending = False

    async def reply(self, message: ConversationMessage) -> Optional[ConversationMessage]:
        result = await self.respond(message.content)
        if result is None:
            return None
        return ConversationMessage.create(ROLE_ASSISTANT, result.text)
