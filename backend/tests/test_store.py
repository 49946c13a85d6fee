from datetime import timedelta

import pytest
from sqlalchemy import text

from hangman import db
from hangman.errors import GameConflictError
from hangman.models import Game, utcnow
from hangman.services.games import new_game_state, resolve_guess
from hangman.services.store import GameStore


def test_create_and_load(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    assert len(game_id) == 24
    loaded = store.load(game_id)
    assert loaded.game_id == game_id
    assert loaded.level == 'Movies'
    assert loaded.state == new_game_state('JAWS')


def test_load_unknown(store):
    assert store.load('f' * 24) is None
    assert store.load_for_update('f' * 24) is None


def test_save_round_trips_guess_history(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    state = store.load_for_update(game_id).state
    for letter in 'zaq':
        state = resolve_guess(state, letter).state
    assert store.save(game_id, state) is True

    db.session.expire_all()
    loaded = store.load(game_id).state
    assert loaded.guessed_letters == ('z', 'a', 'q')
    assert loaded.progress == '_A__'
    assert loaded.attempts == 4


def test_save_unknown(store):
    assert store.save('f' * 24, new_game_state('JAWS')) is False


def test_remove(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    assert store.remove(game_id) is True
    assert store.load(game_id) is None
    assert store.remove(game_id) is False


def test_expired_games_are_absent(flask_app):
    expired_store = GameStore(db.session, ttl=timedelta(seconds=-1))
    game_id = expired_store.create('Movies', new_game_state('JAWS'))
    assert expired_store.load(game_id) is None
    assert expired_store.save(game_id, new_game_state('JAWS')) is False
    assert expired_store.remove(game_id) is False


def test_purge_expired(store):
    fresh = store.create('Movies', new_game_state('JAWS'))
    stale = store.create('Sports', new_game_state('SOCCER'))
    game = db.session.get(Game, stale)
    game.expires_at = utcnow() - timedelta(minutes=1)
    db.session.commit()

    assert store.purge_expired() == 1
    assert db.session.get(Game, stale) is None
    assert store.load(fresh) is not None


def test_games_expire_after_ttl(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    game = db.session.get(Game, game_id)
    assert game.expires_at - game.created_at == timedelta(hours=24)


def test_concurrent_update_is_detected(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    loaded = store.load_for_update(game_id)

    # Another writer bumps the row behind this session's back
    db.session.connection().execute(
        text('UPDATE game SET version = version + 1 WHERE id = :id'), {'id': game_id}
    )

    with pytest.raises(GameConflictError):
        store.save(game_id, resolve_guess(loaded.state, 'a').state, expected_version=loaded.version)


def test_interleaved_guesses_do_not_lose_updates(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    first = store.load_for_update(game_id)
    second = store.load_for_update(game_id)
    assert first.version == second.version

    assert store.save(game_id, resolve_guess(second.state, 'z').state, expected_version=second.version)
    with pytest.raises(GameConflictError):
        store.save(game_id, resolve_guess(first.state, 'a').state, expected_version=first.version)

    stored = store.load(game_id)
    assert stored.state.guessed_letters == ('z',)
    assert stored.state.attempts == 5
    assert stored.version == first.version + 1


def test_save_with_current_version(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    loaded = store.load_for_update(game_id)
    assert store.save(game_id, resolve_guess(loaded.state, 'a').state, expected_version=loaded.version)
    assert store.load(game_id).state.progress == '_A__'


def test_corrupt_guess_history_is_not_reset(store):
    game_id = store.create('Movies', new_game_state('JAWS'))
    db.session.connection().execute(
        text("UPDATE game SET guessed_letters = 'not json' WHERE id = :id"), {'id': game_id}
    )
    db.session.expire_all()
    with pytest.raises(ValueError):
        store.load(game_id)
