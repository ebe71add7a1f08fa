import os
from dotenv import load_dotenv

load_dotenv()


def _float(name, default):
    value = os.getenv(name)
    return float(value) if value else default


class Config:
    """Base configuration"""
    CONSUMER_KEY = os.getenv('DARAJA_CONSUMER_KEY')
    CONSUMER_SECRET = os.getenv('DARAJA_CONSUMER_SECRET')
    ENVIRONMENT = os.getenv('DARAJA_ENVIRONMENT', 'sandbox')
    CERTIFICATE = os.getenv('DARAJA_CERTIFICATE', '')
    INITIATOR_PASSWORD = os.getenv('DARAJA_INITIATOR_PASSWORD')
    SECURITY_CREDENTIAL = os.getenv('DARAJA_SECURITY_CREDENTIAL', '')

    # HTTP
    CONNECT_TIMEOUT = _float('DARAJA_CONNECT_TIMEOUT', 10.0)
    TIMEOUT = _float('DARAJA_TIMEOUT', 30.0)

    # Retry / backoff
    RETRY_INITIAL_INTERVAL = 0.5
    RETRY_MULTIPLIER = 1.5
    RETRY_MAX_INTERVAL = 60.0
    RETRY_MAX_ELAPSED = _float('DARAJA_RETRY_MAX_ELAPSED', 300.0)
    RETRY_MAX_ATTEMPTS = None


class SandboxConfig(Config):
    """Sandbox configuration"""
    ENVIRONMENT = 'sandbox'


class ProductionConfig(Config):
    """Production configuration"""
    ENVIRONMENT = 'production'


class TestingConfig(Config):
    """Testing configuration"""
    CONSUMER_KEY = 'test-consumer-key'
    CONSUMER_SECRET = 'test-consumer-secret'
    ENVIRONMENT = 'sandbox'
    RETRY_INITIAL_INTERVAL = 0.01
    RETRY_MAX_INTERVAL = 0.05
    RETRY_MAX_ELAPSED = 5.0
    RETRY_MAX_ATTEMPTS = 5


config = {
    'sandbox': SandboxConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': Config
}
