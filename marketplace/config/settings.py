"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config:
    DEBUG = os.getenv("DEBUG", "false").lower() in _TRUE_VALUES

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Auth
    SERVICE_AUTH_SECRET = os.getenv("SERVICE_AUTH_SECRET", "")
    SERVICE_AUTH_ISSUER = os.getenv("SERVICE_AUTH_ISSUER", "marketplace-auth")
    SERVICE_AUTH_AUDIENCE = os.getenv("SERVICE_AUTH_AUDIENCE", "marketplace-api")

    # Postgresql Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_CONNECT_ATTEMPTS: int = int(os.getenv("DB_CONNECT_ATTEMPTS", "5"))
    DB_TX_TIMEOUT_SECONDS: int = int(os.getenv("DB_TX_TIMEOUT_SECONDS", "30"))
    DB_TX_MAX_WAIT_SECONDS: int = int(os.getenv("DB_TX_MAX_WAIT_SECONDS", "10"))

    # Redis settings (real-time broadcast; empty disables it)
    REDIS_URL: str = os.getenv("REDIS_URL", "")

    # Push notifications (FCM HTTP v1; empty disables push)
    FCM_PROJECT_ID: str = os.getenv("FCM_PROJECT_ID", "")
    FCM_ACCESS_TOKEN: str = os.getenv("FCM_ACCESS_TOKEN", "")
    PUSH_TIMEOUT_SECONDS: float = float(os.getenv("PUSH_TIMEOUT_SECONDS", "10"))

    # Email (SMTP; empty credentials disable email)
    SMTP_SERVER: str = os.getenv("SMTP_SERVER", "smtp.gmail.com")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")

    # Proposals and credits
    MAX_PEERS_PER_APPLICATION: int = int(os.getenv("MAX_PEERS_PER_APPLICATION", "5"))
    DEFAULT_REFUND_PERCENTAGE: float = float(
        os.getenv("DEFAULT_REFUND_PERCENTAGE", "0.5")
    )
    # Refund the accepted bidder when the client cancels the hire
    REFUND_ON_CANCEL = os.getenv("REFUND_ON_CANCEL", "true").lower() in _TRUE_VALUES
    CREDIT_HISTORY_MAX_LIMIT: int = int(os.getenv("CREDIT_HISTORY_MAX_LIMIT", "100"))

    # Chat
    FIRST_MESSAGE_MAX_ATTEMPTS: int = int(os.getenv("FIRST_MESSAGE_MAX_ATTEMPTS", "3"))
    FIRST_MESSAGE_RETRY_MULTIPLIER: float = float(
        os.getenv("FIRST_MESSAGE_RETRY_MULTIPLIER", "1.0")
    )
    PHONE_MIN_DIGITS: int = int(os.getenv("PHONE_MIN_DIGITS", "7"))
    MESSAGE_MAX_LENGTH: int = int(os.getenv("MESSAGE_MAX_LENGTH", "5000"))
    CONVERSATION_PAGE_LIMIT: int = int(os.getenv("CONVERSATION_PAGE_LIMIT", "20"))
    MESSAGE_PAGE_LIMIT: int = int(os.getenv("MESSAGE_PAGE_LIMIT", "50"))

    # Outbox
    OUTBOX_BATCH_SIZE: int = int(os.getenv("OUTBOX_BATCH_SIZE", "100"))
    OUTBOX_POLL_SECONDS: float = float(os.getenv("OUTBOX_POLL_SECONDS", "5"))
    OUTBOX_CLAIM_TIMEOUT_SECONDS: int = int(os.getenv("OUTBOX_CLAIM_TIMEOUT_SECONDS", "300"))
    OUTBOX_MAX_ATTEMPTS: int = int(os.getenv("OUTBOX_MAX_ATTEMPTS", "5"))


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    LOG_LEVEL = "WARNING"


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])
