from dataclasses import dataclass, field, replace
from typing import Tuple

MAX_ATTEMPTS = 6


@dataclass(frozen=True)
class GameState:
    """Server-side truth for a single game.

    ``progress`` always has the same length as ``answer``. ``won`` is derived
    rather than stored: a game is won when it is over with attempts left.
    """

    answer: str
    progress: str
    attempts: int = MAX_ATTEMPTS
    guessed_letters: Tuple[str, ...] = field(default_factory=tuple)
    over: bool = False

    @property
    def won(self) -> bool:
        return self.over and self.attempts > 0

    def evolve(self, **changes) -> 'GameState':
        return replace(self, **changes)
