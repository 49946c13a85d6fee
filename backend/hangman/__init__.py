from datetime import timedelta
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
import click

from hangman.config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://localhost:3000",
]
MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    x_for = int(flask_app.config.get('PROXY_FIX_X_FOR', 0))
    if x_for > 0:
        flask_app.wsgi_app = ProxyFix(flask_app.wsgi_app, x_for=x_for)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db, directory=MIGRATIONS_DIR)

    origins = allowed_origins + [o for o in flask_app.config.get('CORS_EXTRA_ORIGINS', []) if o]
    CORS(
        flask_app,
        supports_credentials=True,
        origins=origins,
        methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    # Collaborators are built once here and handed to handlers via app.extensions
    from hangman import models  # noqa: F401
    from hangman.services.store import GameStore
    from hangman.services.words import WordSource
    from hangman.services.tokens import SessionTokens
    from hangman.services.ratelimit import RateLimiter

    store = GameStore(db.session, ttl=timedelta(hours=flask_app.config.get('GAME_TTL_HOURS', 24)))
    word_source = WordSource(db.session)
    flask_app.extensions['game_store'] = store
    flask_app.extensions['word_source'] = word_source
    flask_app.extensions['session_tokens'] = SessionTokens(
        flask_app.config['JWT_SECRET'],
        expiry_hours=flask_app.config.get('JWT_EXPIRY_HOURS', 24),
    )
    flask_app.extensions['rate_limiter'] = RateLimiter()

    @flask_app.teardown_appcontext
    def close_store(exc):
        store.close()

    from hangman.main import main
    flask_app.register_blueprint(main)

    from hangman.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/v1/games')

    from hangman.errors import register_error_handlers
    register_error_handlers(flask_app)

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from hangman.services.words import load_bundled_words
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            added = word_source.seed(load_bundled_words())
            print(f'Database has been reset and seeded with {added} words!')

    @click.command('seed-words')
    @click.option('--file', 'path', type=click.Path(exists=True, dir_okay=False), default=None,
                  help='JSON file mapping category to a list of words.')
    def seed_words_command(path):
        """Adds words from the bundled list (or --file) that are not stored yet."""
        from hangman.services.words import load_bundled_words
        with flask_app.app_context():
            words = load_bundled_words(path) if path else load_bundled_words()
            added = word_source.seed(words)
            print(f'Added {added} words.')

    @click.command('purge-expired')
    def purge_expired_command():
        """Deletes games past their expiry time."""
        with flask_app.app_context():
            removed = store.purge_expired()
            flask_app.logger.info(f"[purge] removed={removed}")
            print(f'Removed {removed} expired games.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(seed_words_command)
    flask_app.cli.add_command(purge_expired_command)

    return flask_app
