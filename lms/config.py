# lms/config.py
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")

@dataclass
class Settings:
    # Database
    database_url: str = os.getenv("LMS_DATABASE_URL") or os.getenv("DATABASE_URL", "sqlite:///library.db")
    sql_echo: bool = _env_bool("LMS_SQL_ECHO")

    # E-mail (password reset codes)
    smtp_host: str = os.getenv("LMS_SMTP_HOST", "smtp.gmail.com")
    smtp_port: int = int(os.getenv("LMS_SMTP_PORT", "587"))
    smtp_username: Optional[str] = os.getenv("LMS_SMTP_USERNAME")
    smtp_password: Optional[str] = os.getenv("LMS_SMTP_PASSWORD")
    smtp_from_email: str = os.getenv("LMS_SMTP_FROM_EMAIL", "noreply@library.local")
    smtp_timeout: float = float(os.getenv("LMS_SMTP_TIMEOUT", "10"))

    # Security
    bcrypt_rounds: int = int(os.getenv("LMS_BCRYPT_ROUNDS", "12"))

    # Circulation
    max_active_loans: int = int(os.getenv("LMS_MAX_ACTIVE_LOANS", "5"))

    # Logging
    log_level: str = os.getenv("LMS_LOG_LEVEL", "WARNING")


settings = Settings()
