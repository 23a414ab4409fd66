"""
Default settings. create_app() copies them into app.config, main() lets
PORT and STORAGE from the environment override the two that matter at runtime.
"""
from pathlib import Path

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 3000

STORAGES = ('memory', 'sqlite')
DEFAULT_STORAGE = 'memory'

DATA_DIR = Path('data')      # relative to the working directory
DB_PATH = DATA_DIR / 'app.sqlite'
LOG_FILE = DATA_DIR / 'logs.txt'

ADMIN_ID = 8036875641
REFERRAL_BONUS = 10
SEED_DEMO_DATA = True


def defaults() -> dict:
    return {
        'STORAGE': DEFAULT_STORAGE,
        'DB_PATH': DB_PATH,
        'LOG_FILE': LOG_FILE,
        'ADMIN_ID': ADMIN_ID,
        'REFERRAL_BONUS': REFERRAL_BONUS,
        'SEED_DEMO_DATA': SEED_DEMO_DATA,
        'ENVIRONMENT': 'development',
    }
