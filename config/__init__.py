import os

_ENV_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # An explicit module path wins (e.g. APP_SETTINGS=mycompany.hr_settings)
    explicit = os.getenv("APP_SETTINGS")
    if explicit:
        return explicit

    # APP_ENV picks one of the bundled modules; anything else is development
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENV_MODULES.get(env, "config.development")
