"""Configuration management for the brand feedback dashboard."""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # OpenAI Configuration
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    AI_MODEL = os.getenv("AI_MODEL", "gpt-4o-mini")
    AI_TIMEOUT_SECONDS = int(os.getenv("AI_TIMEOUT_SECONDS", "30"))

    # API Configuration
    API_KEY = os.getenv("API_KEY", "test-api-key-12345")

    # Live feed Configuration
    LIVE_POLL_INTERVAL_SECONDS = float(os.getenv("LIVE_POLL_INTERVAL_SECONDS", "6"))

    # Dashboard Configuration
    SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"
    FEED_DEFAULT_LIMIT = int(os.getenv("FEED_DEFAULT_LIMIT", "50"))


config = Config()
