import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(BASE_DIR, 'statduel.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Country/indicator table built offline from World Bank data
    DATASET_PATH = os.environ.get('DATASET_PATH') or os.path.join(BASE_DIR, 'data', 'worldbank.json')
    # Trailing window (days) for the leaderboard high score
    HIGH_SCORE_WINDOW_DAYS = int(os.environ.get('HIGH_SCORE_WINDOW_DAYS', '7'))
    # Random pair draws before falling back to a scan of the dataset
    ROUND_SELECTION_MAX_ATTEMPTS = int(os.environ.get('ROUND_SELECTION_MAX_ATTEMPTS', '500'))
    # Optional: fixed seed for round selection. Empty means unseeded.
    RANDOM_SEED = os.environ.get('RANDOM_SEED') or None
    # Country names and flags for display
    COUNTRY_INFO_ENABLED = os.environ.get('COUNTRY_INFO_ENABLED', '1') not in ('0', 'false', 'False')
    COUNTRY_INFO_URL = os.environ.get('COUNTRY_INFO_URL') or 'https://restcountries.com/v3.1/alpha/{code}'
    COUNTRY_INFO_TTL_SEC = int(os.environ.get('COUNTRY_INFO_TTL_SEC', str(60 * 60 * 24)))
    COUNTRY_INFO_TIMEOUT_SEC = float(os.environ.get('COUNTRY_INFO_TIMEOUT_SEC', '5'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
