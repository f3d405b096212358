import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./bookings.db")
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me-0123456789abcdef")
JWT_ALGORITHM = "HS256"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
