"""
Configuration file for the application
Loads settings from environment variables
"""
import os
from dotenv import load_dotenv
from pydantic import BaseModel

from .errors import ConfigurationError
from .exam_session import EXAM_DURATION_SECONDS, POINTS_PER_CORRECT

# Load environment variables (for local development)
load_dotenv()


class StoreConfig(BaseModel):
    """Connection settings for the questions table"""
    base_url: str
    api_key: str
    table: str = 'questions'
    limit: int = 100
    timeout: float = 10.0


class Config:
    """Application configuration"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY')
    DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'

    # Question store (Supabase REST)
    SUPABASE_URL = os.environ.get('SUPABASE_URL', '').strip()
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY', '').strip()
    SUPABASE_TIMEOUT = float(os.environ.get('SUPABASE_TIMEOUT', 10))

    # Exam settings
    EXAM_TITLE = os.environ.get('EXAM_TITLE', 'COPS PRAJA')
    EXAM_DURATION_SECONDS = EXAM_DURATION_SECONDS
    POINTS_PER_CORRECT = POINTS_PER_CORRECT
    REVIEW_ENABLED = os.environ.get('REVIEW_ENABLED', 'True').lower() == 'true'
    SESSION_IDLE_GRACE_SECONDS = int(os.environ.get('SESSION_IDLE_GRACE_SECONDS', 30 * 60))
    MAX_EXAM_SESSIONS = int(os.environ.get('MAX_EXAM_SESSIONS', 1000))

    # Server settings
    PORT = int(os.environ.get('PORT', 5000))
    HOST = os.environ.get('HOST', '0.0.0.0')

    @classmethod
    def get_store_config(cls):
        """Get question store configuration, failing on missing values"""
        missing = [
            name for name, value in (
                ('SUPABASE_URL', cls.SUPABASE_URL),
                ('SUPABASE_ANON_KEY', cls.SUPABASE_ANON_KEY),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )

        return StoreConfig(
            base_url=cls.SUPABASE_URL.rstrip('/'),
            api_key=cls.SUPABASE_ANON_KEY,
            timeout=cls.SUPABASE_TIMEOUT,
        )
