import threading
import time
from functools import wraps
from typing import Dict, Optional, Tuple

from flask import current_app, jsonify, request

from hangman.services import get_rate_limiter


class RateLimiter:
    """Fixed-window request counter keyed by ``(scope, client)``.

    In-process only; each worker keeps its own counts. Windows that have
    run out are swept at most once per ``sweep_interval`` seconds.
    """

    def __init__(self, clock=time.monotonic, sweep_interval: float = 60.0):
        self._clock = clock
        self._sweep_interval = sweep_interval
        # key -> (window start, count, window length)
        self._windows: Dict[Tuple[str, str], Tuple[float, int, float]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (started, _, window) in self._windows.items() if now - started >= window]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    def hit(self, scope: str, client: str, limit: int, window: float) -> Optional[float]:
        """Count one request. Returns seconds to wait when over the limit, else None."""
        now = self._clock()
        key = (scope, client)
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            started, count, _ = self._windows.get(key, (now, 0, window))
            if now - started >= window:
                started, count = now, 0
            if count >= limit:
                return max(0.0, window - (now - started))
            self._windows[key] = (started, count + 1, window)
        return None

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def check_rate_limit(scope: str, config_key: str, message: str):
    """Return a 429 response when the caller is over ``config_key``'s limit."""
    app = current_app
    if app.config.get('TESTING') and not app.config.get('ENABLE_RATE_LIMITS_IN_TESTS'):
        return None
    limit, window = app.config[config_key]
    client = request.remote_addr or 'unknown'
    retry_after = get_rate_limiter().hit(scope, client, int(limit), float(window))
    if retry_after is None:
        return None
    app.logger.warning(f"[rate-limit] scope={scope} client={client} retry_after={retry_after:.0f}s")
    response = jsonify({'success': False, 'error': message})
    response.status_code = 429
    response.headers['Retry-After'] = str(int(retry_after) + 1)
    return response


def rate_limited(scope: str, config_key: str, message: str):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            limited = check_rate_limit(scope, config_key, message)
            if limited is not None:
                return limited
            return f(*args, **kwargs)
        return decorated_function
    return decorator
