import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./portal.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 30))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Public URL of the portal front end, used to build setup/recovery links
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")

    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))
    RECOVERY_TOKEN_TTL_DAYS = int(data.get("RECOVERY_TOKEN_TTL_DAYS", 30))
    DELETION_GRACE_DAYS = int(data.get("DELETION_GRACE_DAYS", 30))
    # Open realtime sockets re-check their access at least this often
    REALTIME_AUTH_RECHECK_SECONDS = float(data.get("REALTIME_AUTH_RECHECK_SECONDS", 60))
    ROLE_RESOLUTION_TIMEOUT_SECONDS = float(
        data.get("ROLE_RESOLUTION_TIMEOUT_SECONDS", 5)
    )

    # Shown as the account label in authenticator apps
    MFA_ISSUER = data.get("MFA_ISSUER", "AI Chatbot Admin System")

    RESEND_API_KEY = data.get("RESEND_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "AI Chatbot Admin <onboarding@resend.dev>")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 20))

    # Drive links must be publicly readable; the key is optional
    DRIVE_ACCESS_CHECK = bool(data.get("DRIVE_ACCESS_CHECK", True))
    GOOGLE_API_KEY = data.get("GOOGLE_API_KEY", "")
    DRIVE_CHECK_TIMEOUT_SECONDS = float(data.get("DRIVE_CHECK_TIMEOUT_SECONDS", 10))

    STORAGE_ROOT = data.get("STORAGE_ROOT", os.path.join(ROOT_PATH, "storage"))
    STORAGE_PUBLIC_URL = data.get(
        "STORAGE_PUBLIC_URL", "http://localhost:8000/storage"
    )
