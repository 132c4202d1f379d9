# apan/config.py

from dotenv import load_dotenv
import os

# ================= ENV =================
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ---------------- SECURITY ----------------
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
RESET_TOKEN_EXPIRE_MINUTES = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "60"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY missing in .env!")

# ---------------- DATABASE ----------------
# If DATABASE_URL is NOT provided -> use local SQLite
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./app.db")
SQL_ECHO = _flag("SQL_ECHO")

# ---------------- HTTP ----------------
API_PREFIX = os.getenv("API_PREFIX", "/api")
FRONTEND_BASE_URL = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")

# ---------------- MAIL ----------------
MAIL_PROVIDER = os.getenv("MAIL_PROVIDER", "console").lower()
MAIL_HOST = os.getenv("MAIL_HOST")
MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
MAIL_USERNAME = os.getenv("MAIL_USERNAME")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
MAIL_FROM = os.getenv("MAIL_FROM", "APAN <no-reply@apan.local>")
MAIL_USE_TLS = _flag("MAIL_USE_TLS", "true")
MAIL_TIMEOUT = int(os.getenv("MAIL_TIMEOUT", "10"))

# ---------------- LOGGING ----------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
