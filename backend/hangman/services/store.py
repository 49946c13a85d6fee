"""SQL-backed game store.

Games live for a fixed time after creation. Expired rows are treated as
absent by every read and are physically removed by ``purge_expired`` (the
``flask purge-expired`` command).
"""

from datetime import timedelta
from typing import NamedTuple, Optional

from sqlalchemy.orm.exc import StaleDataError

from hangman.errors import GameConflictError
from hangman.models import Game, utcnow
from hangman.services.games import GameState


class StoredGame(NamedTuple):
    game_id: str
    level: str
    state: GameState
    version: int


class GameStore:
    def __init__(self, session, ttl: timedelta = timedelta(hours=24)):
        self.session = session
        self.ttl = ttl

    def create(self, level: str, state: GameState) -> str:
        game = Game(level=level, ttl=self.ttl)
        game.apply_state(state)
        self.session.add(game)
        self.session.commit()
        return game.id

    def _get(self, game_id: str, for_update: bool = False) -> Optional[Game]:
        query = self.session.query(Game).filter_by(id=game_id)
        if for_update:
            query = query.with_for_update()
        game = query.first()
        if game is None or game.is_expired():
            return None
        return game

    def load(self, game_id: str) -> Optional[StoredGame]:
        game = self._get(game_id)
        if game is None:
            return None
        return StoredGame(game.id, game.level, game.to_state(), game.version)

    def load_for_update(self, game_id: str) -> Optional[StoredGame]:
        """Like ``load`` but locks the row until the next commit or rollback.

        Databases without row locks (SQLite) fall back to the version check
        done by ``save``.
        """
        game = self._get(game_id, for_update=True)
        if game is None:
            return None
        return StoredGame(game.id, game.level, game.to_state(), game.version)

    def save(self, game_id: str, state: GameState, expected_version: Optional[int] = None) -> bool:
        """Write ``state`` back. Returns False when the game is gone.

        With ``expected_version`` (the ``version`` of the ``StoredGame`` the
        state was derived from) a row changed by another writer since that
        load raises ``GameConflictError`` instead of being overwritten.
        """
        game = self._get(game_id)
        if game is None:
            return False
        if expected_version is not None and game.version != expected_version:
            self.session.rollback()
            raise GameConflictError(game_id)
        game.apply_state(state)
        self.session.add(game)
        try:
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            raise GameConflictError(game_id) from exc
        return True

    def remove(self, game_id: str) -> bool:
        game = self._get(game_id)
        if game is None:
            return False
        self.session.delete(game)
        self.session.commit()
        return True

    def purge_expired(self) -> int:
        removed = (
            self.session.query(Game)
            .filter(Game.expires_at <= utcnow())
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return removed

    def close(self) -> None:
        self.session.remove()
