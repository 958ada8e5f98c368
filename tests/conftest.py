import json
import os
import random
import sys
import pytest

# Ensure the project root (containing the `statduel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from statduel import create_app, db
from statduel.dataset import Dataset
from statduel.services.countries import clear_country_cache


SAMPLE_DATA = {
    'indicators': ['population', 'gdpPerCapita', 'literacyRate'],
    'indicatorYears': {'population': 2023, 'gdpPerCapita': 2023},
    'countries': {
        'AAA': {'population': 10, 'gdpPerCapita': 500.5, 'literacyRate': None},
        'BBB': {'population': 20, 'gdpPerCapita': 1500.25},
        'CCC': {'population': 30, 'gdpPerCapita': 250.0, 'literacyRate': 88.1},
        'DDD': {'population': 40},
    },
}


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DATASET_PATH = None
    HIGH_SCORE_WINDOW_DAYS = 7
    ROUND_SELECTION_MAX_ATTEMPTS = 500
    RANDOM_SEED = 1234
    COUNTRY_INFO_ENABLED = False
    COUNTRY_INFO_URL = 'https://countries.test/alpha/{code}'
    COUNTRY_INFO_TTL_SEC = 60
    COUNTRY_INFO_TIMEOUT_SEC = 1
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def sample_dataset():
    return Dataset.from_dict(SAMPLE_DATA)


@pytest.fixture()
def dataset_file(tmp_path):
    path = tmp_path / 'worldbank.json'
    path.write_text(json.dumps(SAMPLE_DATA), encoding='utf-8')
    return str(path)


@pytest.fixture()
def rng():
    return random.Random(42)


@pytest.fixture()
def flask_app(sample_dataset):
    application = create_app(TestConfig, dataset=sample_dataset)
    with application.app_context():
        # Ensure models are imported so tables are created
        import statduel.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture(autouse=True)
def _fresh_country_cache():
    clear_country_cache()
    yield
    clear_country_cache()
