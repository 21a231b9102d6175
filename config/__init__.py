import os

_ALIASES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # APP_ENV chọn file cấu hình; mặc định 'development'
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ALIASES.get(env, "config.development")
