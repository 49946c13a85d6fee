import pytest
from pydantic import ValidationError

from hangman.schemas import (
    GAME_LEVELS,
    CreateGameRequest,
    GuessRequest,
    is_valid_game_id,
    validation_details,
)


def test_levels():
    assert len(GAME_LEVELS) == 8
    assert len(set(GAME_LEVELS)) == 8
    for level in ('Movies', 'Video Games', 'Sports', 'Idioms', 'TV Shows', 'Food', 'Animals', 'Cities'):
        assert CreateGameRequest.model_validate({'level': level}).level == level


def test_unknown_level():
    with pytest.raises(ValidationError) as excinfo:
        CreateGameRequest.model_validate({'level': 'Easy'})
    details = validation_details(excinfo.value)
    assert details[0]['field'] == 'level'
    assert details[0]['message'].startswith('Level must be one of: Movies')


@pytest.mark.parametrize('raw, expected', [('a', 'a'), ('Q', 'q'), ('z', 'z')])
def test_letter_is_lower_cased(raw, expected):
    assert GuessRequest.model_validate({'letter': raw}).letter == expected


@pytest.mark.parametrize('raw, message', [
    ('ab', 'Letter must be a single character'),
    ('', 'Letter must be a single character'),
    ('1', 'Letter must be a valid alphabetic character'),
    ('-', 'Letter must be a valid alphabetic character'),
    ('é', 'Letter must be a valid alphabetic character'),
])
def test_bad_letters(raw, message):
    with pytest.raises(ValidationError) as excinfo:
        GuessRequest.model_validate({'letter': raw})
    assert validation_details(excinfo.value) == [{'field': 'letter', 'message': message}]


def test_game_id_format():
    assert is_valid_game_id('507f1f77bcf86cd799439011')
    assert is_valid_game_id('507F1F77BCF86CD799439011')
    assert not is_valid_game_id('507f1f77bcf86cd79943901')
    assert not is_valid_game_id('507f1f77bcf86cd79943901g')
    assert not is_valid_game_id(None)
