SECRET_KEY = "test-secret"
DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

EVENT_NAME = "Test Event"
EVENT_LOCATION = None

PARTICIPANT_STORE = "memory"
DB_CONFIG = {}
AUTO_INIT_DB = False

ADMIN_PIN = "1234"
DUPLICATE_POLICY = "allow"
NORMALIZE_SCANS = False

SCANNING_OPEN = True
REGISTRATION_OPEN = True

PDF_FONT_PATH = None
SEED_PARTICIPANTS = "[]"
