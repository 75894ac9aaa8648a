from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of examdrill folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'examdrill.db'}"
    sql_echo: bool = False
    
    # Logging
    log_level: str = "INFO"
    
    # Study session settings
    default_question_count: int = 20
    max_question_count: int = 50
    streak_lookback_sessions: int = 30  # sessions scanned for the streak
    history_page_size: int = 20
    
    class Config:
        env_file = str(PROJECT_ROOT / ".env")

settings = Settings()
