from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from hangman.services.games import GuessRejection


class GameConflictError(Exception):
    """Another request updated the same game between our read and write."""

    def __init__(self, game_id):
        super().__init__(f"game {game_id} was updated concurrently")
        self.game_id = game_id


NO_WORD_AVAILABLE = 'No words found for level: {level}'
GAME_NOT_FOUND = 'Game not found or expired'
TOKEN_REQUIRED = 'Access token required'
TOKEN_ERRORS = {
    'invalid': 'Invalid token',
    'expired': 'Token expired',
}
REJECTION_MESSAGES = {
    GuessRejection.GAME_ALREADY_OVER: 'Game is already over',
    GuessRejection.LETTER_ALREADY_GUESSED: 'Letter already guessed',
}


def error_response(message, status, **extra):
    body = {'success': False, 'error': message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(flask_app):
    from hangman import db

    @flask_app.errorhandler(404)
    def not_found(exc):
        return error_response('Route not found', 404)

    @flask_app.errorhandler(405)
    def method_not_allowed(exc):
        return error_response('Method not allowed', 405)

    @flask_app.errorhandler(GameConflictError)
    def game_conflict(exc):
        flask_app.logger.warning(f"[conflict] game={exc.game_id}")
        return error_response('Game was updated concurrently, retry', 409)

    @flask_app.errorhandler(SQLAlchemyError)
    def database_error(exc):
        flask_app.logger.exception('[db-error] %s', exc)
        db.session.rollback()
        return error_response('Database error occurred', 500)

    @flask_app.errorhandler(Exception)
    def unhandled(exc):
        if isinstance(exc, HTTPException):
            return error_response(exc.description or exc.name, exc.code or 500)
        flask_app.logger.exception('[error] unhandled %s', type(exc).__name__)
        return error_response('Internal server error', 500)
