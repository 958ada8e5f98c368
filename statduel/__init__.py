import logging
import random

import click
from flask import Flask, current_app
from flask_cors import CORS
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]


def get_dataset():
    """The process-wide dataset for the current app, loaded on first use."""
    return current_app.extensions['statduel']['dataset'].get()


def get_rng():
    return current_app.extensions['statduel']['rng']


def create_app(config_class=Config, dataset=None):
    """Build the Flask app.

    ``dataset`` may be a preloaded ``Dataset``; otherwise it is read from
    ``DATASET_PATH`` the first time a request needs it.
    """
    from statduel.dataset import DatasetHandle

    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    seed = flask_app.config.get('RANDOM_SEED')
    flask_app.extensions['statduel'] = {
        'dataset': DatasetHandle(path=flask_app.config.get('DATASET_PATH'), dataset=dataset),
        'rng': random.Random(seed) if seed is not None else random.Random(),
    }

    # Import and register blueprints here
    from statduel.main import main
    flask_app.register_blueprint(main)

    from statduel.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import statduel.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('dataset-check')
    def dataset_check_command():
        """Loads the dataset and prints a summary."""
        from statduel.dataset import DatasetError
        with flask_app.app_context():
            try:
                ds = get_dataset()
            except DatasetError as exc:
                raise click.ClickException(str(exc))
            print(f"{len(ds)} countries, {len(ds.indicators)} indicators")
            for key in ds.indicators:
                covered = sum(1 for code in ds.country_codes if ds.value(code, key) is not None)
                year = ds.indicator_year(key)
                print(f"  {key}: {covered} countries" + (f" ({year})" if year else ''))

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(dataset_check_command)

    return flask_app
