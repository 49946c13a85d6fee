"""Session credentials binding a client to one game.

A credential is an HS256 JWT carrying ``gameId``. Verification never raises:
callers get a ``TokenCheck`` saying which game the token names or why it was
refused.
"""

import time
from dataclasses import dataclass
from typing import Optional

import jwt

INVALID = 'invalid'
EXPIRED = 'expired'


@dataclass(frozen=True)
class TokenCheck:
    game_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.error is None and self.game_id is not None


class SessionTokens:
    ALGORITHM = 'HS256'

    def __init__(self, secret: str, expiry_hours: int = 24):
        self.secret = secret
        self.expiry_seconds = int(expiry_hours) * 3600

    def issue(self, game_id: str) -> str:
        now = int(time.time())
        payload = {
            'gameId': game_id,
            'iat': now,
            'exp': now + self.expiry_seconds,
        }
        return jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> TokenCheck:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.ALGORITHM])
        except jwt.ExpiredSignatureError:
            return TokenCheck(error=EXPIRED)
        except jwt.InvalidTokenError:
            return TokenCheck(error=INVALID)
        game_id = payload.get('gameId')
        if not isinstance(game_id, str) or not game_id:
            return TokenCheck(error=INVALID)
        return TokenCheck(game_id=game_id)
