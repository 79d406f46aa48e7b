
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///local.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    TIMEZONE = os.getenv("TIMEZONE", "UTC")
    BUSINESS_HOURS_START = os.getenv("BUSINESS_HOURS_START", "09:00")
    BUSINESS_HOURS_END = os.getenv("BUSINESS_HOURS_END", "18:00")

    ADMIN_TOKEN = (os.getenv("ADMIN_TOKEN") or "dev-admin-token").strip()

    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER = os.getenv("SMTP_USER") or os.getenv("GMAIL_USER")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD") or os.getenv("GMAIL_APP_PASSWORD")
    MAIL_SENDER_NAME = os.getenv("MAIL_SENDER_NAME", "Mi Turno")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ADMIN_TOKEN = "test-admin-token"
    SMTP_USER = None
    SMTP_PASSWORD = None
