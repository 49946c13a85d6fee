from hangman import db
from hangman.services.games import GameState
from datetime import datetime, timedelta, timezone
import json
import secrets


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_game_id() -> str:
    """24 lower-case hex characters."""
    return secrets.token_hex(12)


class Word(db.Model):
    __tablename__ = 'word'
    id = db.Column(db.Integer, primary_key=True)
    word = db.Column(db.String(128), nullable=False)
    category = db.Column(db.String(64), nullable=False, index=True)  # always lower-case
    __table_args__ = (db.UniqueConstraint('category', 'word', name='uq_word_category_word'),)


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.String(24), primary_key=True)
    level = db.Column(db.String(64), nullable=False)
    answer = db.Column(db.String(128), nullable=False)
    progress = db.Column(db.String(128), nullable=False)
    attempts = db.Column(db.Integer, nullable=False)
    over = db.Column(db.Boolean, default=False, nullable=False)
    guessed_letters = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded list, submission order
    version = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    # Optimistic lock: a stale UPDATE matches no row and raises StaleDataError
    __mapper_args__ = {'version_id_col': version}

    def __init__(self, ttl=timedelta(hours=24), **kwargs):
        super(Game, self).__init__(**kwargs)
        if not self.id:
            self.id = generate_game_id()
        if not self.created_at:
            self.created_at = utcnow()
        if not self.expires_at:
            self.expires_at = self.created_at + ttl

    def is_expired(self, now=None) -> bool:
        return self.expires_at <= (now or utcnow())

    def to_state(self) -> GameState:
        letters = json.loads(self.guessed_letters)
        return GameState(
            answer=self.answer,
            progress=self.progress,
            attempts=self.attempts,
            guessed_letters=tuple(letters),
            over=bool(self.over),
        )

    def apply_state(self, state: GameState) -> None:
        self.answer = state.answer
        self.progress = state.progress
        self.attempts = state.attempts
        self.over = state.over
        self.guessed_letters = json.dumps(list(state.guessed_letters))

