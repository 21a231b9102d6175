import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

EVENT_NAME = os.getenv("EVENT_NAME", "ปฐมนิเทศนักศึกษาใหม่")
EVENT_LOCATION = os.getenv("EVENT_LOCATION", "หอประชุมใหญ่")

# "memory" keeps the registry in-process; "mysql" persists it in DB_CONFIG.
PARTICIPANT_STORE = os.getenv("PARTICIPANT_STORE", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "event_checkin"),
}

# If enabled, the participants table is created on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

ADMIN_PIN = os.getenv("ADMIN_PIN", "1234")

# "allow" (shared household phones) or "reject"
DUPLICATE_POLICY = os.getenv("DUPLICATE_POLICY", "allow")
NORMALIZE_SCANS = bool(int(os.getenv("NORMALIZE_SCANS", "0")))

SCANNING_OPEN = bool(int(os.getenv("SCANNING_OPEN", "1")))
REGISTRATION_OPEN = bool(int(os.getenv("REGISTRATION_OPEN", "1")))

PDF_FONT_PATH = os.getenv("PDF_FONT_PATH")

# Seed list loaded into an empty registry at startup (JSON list of objects).
SEED_PARTICIPANTS = os.getenv(
    "SEED_PARTICIPANTS",
    '[{"student_id": "64123456", "name": "สมชาย ใจดี", "phone": "0812345678",'
    ' "faculty": "วิทยาการจัดการ", "major": "การจัดการธุรกิจ", "event_id": "e1"}]',
)
