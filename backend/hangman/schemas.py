"""Request bodies accepted by the game API.

Handlers validate every body here before any game logic runs, so the core only
ever sees a known level and a single lower-case letter.
"""

import re
from typing import Dict, List

from pydantic import BaseModel, ValidationError, field_validator

GAME_LEVELS = (
    'Movies',
    'Video Games',
    'Sports',
    'Idioms',
    'TV Shows',
    'Food',
    'Animals',
    'Cities',
)

GAME_ID_RE = re.compile(r'^[0-9a-fA-F]{24}$')
LETTER_RE = re.compile(r'^[a-zA-Z]$')


class CreateGameRequest(BaseModel):
    level: str

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v not in GAME_LEVELS:
            raise ValueError(f"Level must be one of: {', '.join(GAME_LEVELS)}")
        return v


class GuessRequest(BaseModel):
    letter: str

    @field_validator('letter')
    @classmethod
    def validate_letter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError('Letter must be a single character')
        if not LETTER_RE.match(v):
            raise ValueError('Letter must be a valid alphabetic character')
        return v.lower()


def is_valid_game_id(game_id) -> bool:
    return isinstance(game_id, str) and bool(GAME_ID_RE.match(game_id))


def validation_details(exc: ValidationError) -> List[Dict[str, str]]:
    details = []
    for err in exc.errors():
        message = err.get('msg', '')
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        details.append({
            'field': '.'.join(str(part) for part in err.get('loc', ())),
            'message': message,
        })
    return details
