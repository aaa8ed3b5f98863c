import os
from datetime import timedelta

# DEV defaults: override every secret through env vars in production.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(days=int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "30")))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./simplylearn.db")

# Session cookie
COOKIE_NAME = "token"
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() in ("1", "true", "yes")
COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "lax")

# Email verification
OTP_LENGTH = 6
OTP_EXPIRE = timedelta(minutes=10)

# Lockout policy
MAX_FAILED_LOGINS = 3
LOCKOUT_DURATION = timedelta(minutes=5)

# Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = "/uploads"
ALLOWED_UPLOAD_EXTENSIONS = {".pdf", ".doc", ".docx", ".pptx", ".zip"}

# Mail transport (unset SMTP_HOST -> codes are logged instead of sent)
SMTP_HOST = os.getenv("SMTP_HOST")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_FROM = os.getenv("SMTP_FROM", SMTP_USER or "no-reply@simplylearn.local")
