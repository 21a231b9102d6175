import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

EVENT_NAME = os.getenv("EVENT_NAME", "")
EVENT_LOCATION = os.getenv("EVENT_LOCATION")

PARTICIPANT_STORE = os.getenv("PARTICIPANT_STORE", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "event_checkin"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# No default PIN in production: admin routes stay locked until it is set.
ADMIN_PIN = os.getenv("ADMIN_PIN")

DUPLICATE_POLICY = os.getenv("DUPLICATE_POLICY", "allow")
NORMALIZE_SCANS = bool(int(os.getenv("NORMALIZE_SCANS", "0")))

SCANNING_OPEN = bool(int(os.getenv("SCANNING_OPEN", "1")))
REGISTRATION_OPEN = bool(int(os.getenv("REGISTRATION_OPEN", "1")))

PDF_FONT_PATH = os.getenv("PDF_FONT_PATH")

SEED_PARTICIPANTS = os.getenv("SEED_PARTICIPANTS", "[]")
