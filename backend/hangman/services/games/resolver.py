from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .state import GameState


class GuessRejection(str, Enum):
    GAME_ALREADY_OVER = 'game_already_over'
    LETTER_ALREADY_GUESSED = 'letter_already_guessed'


@dataclass(frozen=True)
class GuessOutcome:
    """Result of applying one guess.

    For a rejected guess ``state`` is the untouched input state and
    ``rejection`` names the reason.
    """

    state: GameState
    is_correct_guess: bool = False
    rejection: Optional[GuessRejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def won(self) -> bool:
        return self.accepted and self.state.won


def resolve_guess(state: GameState, letter: str) -> GuessOutcome:
    """Apply a normalised single lower-case letter to ``state``.

    Every occurrence of the letter is revealed at once, using the answer's
    own casing. A miss costs one attempt. When the game ends the full answer
    is revealed.
    """
    if state.over:
        return GuessOutcome(state=state, rejection=GuessRejection.GAME_ALREADY_OVER)
    if letter in state.guessed_letters:
        return GuessOutcome(state=state, rejection=GuessRejection.LETTER_ALREADY_GUESSED)

    answer = state.answer
    revealed = []
    is_correct_guess = False
    for idx, ch in enumerate(answer):
        if ch.lower() == letter:
            revealed.append(ch)
            is_correct_guess = True
        else:
            revealed.append(state.progress[idx])
    progress = ''.join(revealed)

    attempts = state.attempts
    if not is_correct_guess:
        attempts = max(attempts - 1, 0)

    over = attempts == 0 or progress == answer
    if over:
        progress = answer

    next_state = state.evolve(
        progress=progress,
        attempts=attempts,
        guessed_letters=state.guessed_letters + (letter,),
        over=over,
    )
    return GuessOutcome(state=next_state, is_correct_guess=is_correct_guess)
