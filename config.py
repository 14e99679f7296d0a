import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    ENV = os.getenv("ENV", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///hiring.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # empty REDIS_URL runs notification jobs inline
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    MAIL_FROM = os.getenv("MAIL_FROM", "noreply@example.com")
    MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "HR Team")
    EMAIL_MAX_RETRIES = int(os.getenv("EMAIL_MAX_RETRIES", 3))
    EMAIL_RETRY_DELAY = float(os.getenv("EMAIL_RETRY_DELAY", 1.0))
    NOTIFICATIONS_ENABLED = os.getenv("NOTIFICATIONS_ENABLED", "true").lower() == "true"
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")
    JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", 60 * 24))
    PASSING_SCORE_PERCENTAGE = float(os.getenv("PASSING_SCORE_PERCENTAGE", 70))
    INTERVIEW_ELIGIBLE_PERCENTAGE = float(os.getenv("INTERVIEW_ELIGIBLE_PERCENTAGE", 75))
    # bearer-token JSON API, no browser forms
    WTF_CSRF_ENABLED = False
