from functools import wraps

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from hangman.errors import (
    GAME_NOT_FOUND,
    NO_WORD_AVAILABLE,
    REJECTION_MESSAGES,
    TOKEN_ERRORS,
    TOKEN_REQUIRED,
    error_response,
)
from hangman.schemas import CreateGameRequest, GuessRequest, is_valid_game_id, validation_details
from hangman.services import get_game_store, get_session_tokens, get_word_source
from hangman.services.games import GameState, new_game_state, resolve_guess
from hangman.services.ratelimit import check_rate_limit, rate_limited


games = Blueprint('games', __name__)


@games.before_request
def _api_rate_limit():
    return check_rate_limit('api', 'API_RATE_LIMIT', 'Too many requests, please try again later')


def _bearer_token():
    auth_header = request.headers.get('Authorization') or ''
    parts = auth_header.split(' ')
    if len(parts) == 2 and parts[0] == 'Bearer' and parts[1]:
        return parts[1]
    return None


def require_game(for_update=False):
    """Resolve the Bearer credential to a stored game.

    The wrapped view receives the ``game`` keyword argument (a ``StoredGame``).
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            token = _bearer_token()
            if not token:
                return error_response(TOKEN_REQUIRED, 401)

            check = get_session_tokens().verify(token)
            if not check.valid or not is_valid_game_id(check.game_id):
                return error_response(TOKEN_ERRORS.get(check.error, TOKEN_ERRORS['invalid']), 403)

            store = get_game_store()
            game = store.load_for_update(check.game_id) if for_update else store.load(check.game_id)
            if game is None:
                return error_response(GAME_NOT_FOUND, 404)

            kwargs['game'] = game
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def _game_payload(level: str, state: GameState) -> dict:
    return {
        'level': level,
        'attempts': state.attempts,
        'progress': state.progress,
        'over': state.over,
    }


@games.route('', methods=['POST'])
@rate_limited('create', 'CREATE_GAME_RATE_LIMIT', 'Too many games created, please try again later')
def create_game():
    data = request.get_json(silent=True) or {}
    try:
        body = CreateGameRequest.model_validate(data)
    except ValidationError as exc:
        return error_response('Validation failed', 400, details=validation_details(exc))

    answer = get_word_source().random_word(body.level)
    if not answer:
        current_app.logger.info(f"[game-create] no words for level={body.level}")
        return error_response(NO_WORD_AVAILABLE.format(level=body.level), 404)

    state = new_game_state(answer)
    game_id = get_game_store().create(body.level, state)
    token = get_session_tokens().issue(game_id)
    current_app.logger.info(f"[game-create] game={game_id} level={body.level} length={len(answer)}")

    return jsonify({
        'success': True,
        'token': token,
        'game': _game_payload(body.level, state),
    }), 201


@games.route('', methods=['GET'])
@require_game()
def get_game(game):
    payload = _game_payload(game.level, game.state)
    payload['guessedLetters'] = list(game.state.guessed_letters)
    return jsonify({'success': True, 'game': payload})


@games.route('', methods=['PATCH'])
@rate_limited('guess', 'GUESS_RATE_LIMIT', 'Too many guesses, slow down')
@require_game(for_update=True)
def submit_guess(game):
    data = request.get_json(silent=True) or {}
    try:
        body = GuessRequest.model_validate(data)
    except ValidationError as exc:
        return error_response('Validation failed', 400, details=validation_details(exc))

    outcome = resolve_guess(game.state, body.letter)
    if not outcome.accepted:
        current_app.logger.info(
            f"[guess-reject] game={game.game_id} letter={body.letter} reason={outcome.rejection.value}"
        )
        return error_response(REJECTION_MESSAGES[outcome.rejection], 400)

    if not get_game_store().save(game.game_id, outcome.state, expected_version=game.version):
        return error_response(GAME_NOT_FOUND, 404)

    state = outcome.state
    current_app.logger.info(
        f"[guess] game={game.game_id} letter={body.letter} correct={outcome.is_correct_guess} "
        f"attempts={state.attempts} over={state.over}"
    )
    payload = _game_payload(game.level, state)
    payload.update({
        'guessedLetters': list(state.guessed_letters),
        'isCorrectGuess': outcome.is_correct_guess,
        'won': outcome.won,
    })
    return jsonify({'success': True, 'game': payload})


@games.route('', methods=['DELETE'])
@require_game()
def delete_game(game):
    if not get_game_store().remove(game.game_id):
        return error_response(GAME_NOT_FOUND, 404)
    current_app.logger.info(f"[game-delete] game={game.game_id}")
    return '', 204
