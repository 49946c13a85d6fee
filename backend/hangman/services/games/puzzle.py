from .state import GameState, MAX_ATTEMPTS

PLACEHOLDER = '_'
# Never masked and never guessable
PRESERVED_CHARS = frozenset({' ', '-', ':', ',', '.', "'"})


def mask_answer(answer: str) -> str:
    """Hide every character of ``answer`` except preserved punctuation.

    >>> mask_answer("SCHINDLER'S LIST")
    "_________'_ ____"
    """
    return ''.join(ch if ch in PRESERVED_CHARS else PLACEHOLDER for ch in answer)


def new_game_state(answer: str, max_attempts: int = MAX_ATTEMPTS) -> GameState:
    if not answer:
        raise ValueError('answer must be a non-empty string')
    if not 1 <= max_attempts <= MAX_ATTEMPTS:
        raise ValueError(f'max_attempts must be between 1 and {MAX_ATTEMPTS}')
    return GameState(
        answer=answer,
        progress=mask_answer(answer),
        attempts=max_attempts,
        guessed_letters=(),
        over=False,
    )
