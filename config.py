# Configuration settings
import os
from datetime import timedelta


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///beerbuddy.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'change-me-in-production-beerbuddy-signing-key')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv('JWT_EXPIRES_MINUTES', '15')))

    # Business rules
    BEERS_COUNT_MIN = int(os.getenv('BEERS_COUNT_MIN', '1'))
    BEERS_COUNT_MAX = int(os.getenv('BEERS_COUNT_MAX', '12'))
    FEED_PAGE_SIZE = int(os.getenv('FEED_PAGE_SIZE', '10'))
    FEED_MAX_PAGE_SIZE = int(os.getenv('FEED_MAX_PAGE_SIZE', '50'))

    # Threads used for per-user counter reads
    AGGREGATE_WORKERS = int(os.getenv('AGGREGATE_WORKERS', '4'))
    DEBUG = False


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', 'sqlite:///beerbuddy-test.db')
    JWT_SECRET_KEY = 'testing-secret-key-not-for-production'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
