import os
import sys
import pytest

# Ensure the backend root (containing the `hangman` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from hangman import create_app, db
from hangman.config import Config


# One word per category so tests know the answer
TEST_WORDS = {
    'movies': ['JAWS'],
    'sports': ['SOCCER'],
    'idioms': ['A.K.A.'],
    'tv shows': ["GREY'S ANATOMY"],
}


class TestConfig(Config):
    __test__ = False
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    JWT_SECRET = 'test-jwt-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = 'DEBUG'


def build_app(config_class=TestConfig):
    application = create_app(config_class)
    with application.app_context():
        db.create_all()
        application.extensions['word_source'].seed(TEST_WORDS)
    return application


@pytest.fixture()
def flask_app():
    application = build_app()
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def store(flask_app):
    return flask_app.extensions['game_store']


@pytest.fixture()
def tokens(flask_app):
    return flask_app.extensions['session_tokens']


def auth(token):
    return {'Authorization': f'Bearer {token}'}


def new_game(client, level='Movies'):
    res = client.post('/api/v1/games', json={'level': level})
    assert res.status_code == 201
    data = res.get_json()
    return data['token'], data['game']


def guess(client, token, letter):
    return client.patch('/api/v1/games', json={'letter': letter}, headers=auth(token))
