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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./nfe.db")
    DB_CREATE_TABLES = bool(data.get("DB_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # HTML -> PDF conversion service (PDFShift compatible)
    PDF_CONVERSION_URL = data.get("PDF_CONVERSION_URL", "https://api.pdfshift.io/v3/convert/pdf")
    PDF_CONVERSION_API_KEY = os.environ.get(
        "PDF_CONVERSION_API_KEY", data.get("PDF_CONVERSION_API_KEY", "")
    )
    PDF_CONVERSION_TIMEOUT = float(data.get("PDF_CONVERSION_TIMEOUT", 30.0))  # Seconds

    # Invoice document
    TOTAL_POLICY = data.get("TOTAL_POLICY", "warn")  # warn | reject | recompute
    ISSUER_NAME = data.get("ISSUER_NAME", "HEALTHMONEY CLÍNICA")
    ISSUER_ADDRESS = data.get("ISSUER_ADDRESS", "Av. da Universidade, 123 - Campinas - SP")

    # Calendar integration
    CALENDAR_API_URL = data.get("CALENDAR_API_URL", "https://www.googleapis.com/calendar/v3")
    CALENDAR_ID = data.get("CALENDAR_ID", "primary")
    CALENDAR_TIMEOUT = float(data.get("CALENDAR_TIMEOUT", 10.0))
