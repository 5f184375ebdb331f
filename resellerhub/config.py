import os
import time
from dotenv import load_dotenv

load_dotenv()

class Config:
    os.environ['TZ'] = os.getenv('TZ', 'Asia/Jakarta')
    try:
        time.tzset()
    except AttributeError:
        pass

    SECRET_KEY = os.getenv('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("SECRET_KEY must be set in the .env file.")

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    if not SQLALCHEMY_DATABASE_URI:
        user = os.getenv('POSTGRES_USER', 'postgres')
        pw = os.getenv('POSTGRES_PASSWORD', 'password')
        host = os.getenv('POSTGRES_HOST', 'db')
        port = os.getenv('POSTGRES_PORT', '5432')
        db_name = os.getenv('POSTGRES_DB', 'resellerhub')
        SQLALCHEMY_DATABASE_URI = f"postgresql://{user}:{pw}@{host}:{port}/{db_name}"

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'max_overflow': 20,
        'pool_timeout': 30,
        'pool_recycle': 1800,
        'pool_pre_ping': True,
        'connect_args': {
            'connect_timeout': 10
        }
    }

    # Rate limiter counters live in the cache so several instances share them
    CACHE_TYPE = 'RedisCache'
    CACHE_REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/0')
    CACHE_DEFAULT_TIMEOUT = 300

    RATE_LIMIT_REQUESTS = int(os.getenv('RATE_LIMIT_REQUESTS', '30'))
    RATE_LIMIT_WINDOW_SECONDS = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', '60'))

    DEFAULT_COURIER = os.getenv('DEFAULT_COURIER', 'JNE')
    DEFAULT_SERVICE = os.getenv('DEFAULT_SERVICE', 'REG')


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'

    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    CACHE_TYPE = 'SimpleCache'
    CACHE_DEFAULT_TIMEOUT = 300

    RATE_LIMIT_REQUESTS = 1000
    RATE_LIMIT_WINDOW_SECONDS = 60

    DEFAULT_COURIER = 'JNE'
    DEFAULT_SERVICE = 'REG'
