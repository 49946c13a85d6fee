"""Game domain logic: puzzle masking and guess resolution.

Everything in this package is pure: it works on explicitly passed
``GameState`` values and never touches the database, the request or the
session credential. HTTP routes load state from the store, call in here, and
persist whatever comes back.
"""

from .state import GameState, MAX_ATTEMPTS
from .puzzle import PLACEHOLDER, PRESERVED_CHARS, mask_answer, new_game_state
from .resolver import GuessOutcome, GuessRejection, resolve_guess

__all__ = [
    'GameState',
    'GuessOutcome',
    'GuessRejection',
    'MAX_ATTEMPTS',
    'PLACEHOLDER',
    'PRESERVED_CHARS',
    'mask_answer',
    'new_game_state',
    'resolve_guess',
]
