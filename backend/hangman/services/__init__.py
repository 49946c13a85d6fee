"""Collaborators wired up by the application factory.

``create_app`` builds one instance of each and stores it on
``app.extensions``; handlers reach them through the getters below instead of
module-level globals.
"""

from flask import current_app


def get_game_store():
    return current_app.extensions['game_store']


def get_word_source():
    return current_app.extensions['word_source']


def get_session_tokens():
    return current_app.extensions['session_tokens']


def get_rate_limiter():
    return current_app.extensions['rate_limiter']
