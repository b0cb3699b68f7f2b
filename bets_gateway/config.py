import os


class Config:
    # Upstream services
    MATCH_SVC = os.getenv('MATCH_SVC', '')
    PLAYER_SVC = os.getenv('PLAYER_SVC', '')
    CHAMPIONSHIP_SVC = os.getenv('CHAMPIONSHIP_SVC', '')

    # Outbound timeouts, in seconds
    UPSTREAM_CONNECT_TIMEOUT = float(os.getenv('UPSTREAM_CONNECT_TIMEOUT', '3.05'))
    UPSTREAM_READ_TIMEOUT = float(os.getenv('UPSTREAM_READ_TIMEOUT', '10'))
    AGGREGATE_TIMEOUT = float(os.getenv('AGGREGATE_TIMEOUT', '15'))

    # Server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '9999'))
    STATIC_FOLDER = os.getenv('STATIC_FOLDER', 'assets')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    MATCH_SVC = 'http://matches.test/api/matches/1'
    PLAYER_SVC = 'http://players.test/api/players/1'
    CHAMPIONSHIP_SVC = 'http://championships.test/api/championships/1'
    AGGREGATE_TIMEOUT = 5.0
    LOG_LEVEL = 'DEBUG'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
