import random
from typing import Callable, Optional, Sequence, Tuple

from .errors import ConfigError

ChoiceFn = Callable[[Sequence[str]], str]


class FallbackSelector:
    """Picks a generic reply when neither tier matched.

    ``choice`` receives the pool and returns one member of it. Production
    wiring uses an unseeded ``random.Random``; tests pass a seed or their own
    function.
    """

    def __init__(self, pool: Sequence[str], choice: Optional[ChoiceFn] = None, seed: Optional[int] = None) -> None:
        if not pool:
            raise ConfigError("Fallback pool must not be empty")
        self.pool: Tuple[str, ...] = tuple(pool)
        self._choice: ChoiceFn = choice or random.Random(seed).choice

    def select(self) -> str:
        return self._choice(self.pool)
