import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; defaults to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "internship_portal.settings.production"

    if env in {"test", "testing"}:
        return "internship_portal.settings.testing"

    return "internship_portal.settings.development"
