from config.config import env_editor_roles

SECRET_KEY = "test-secret"

# Tests inject their own transport; nothing here should reach a real backend.
API_CONFIG = {
    "base_url": "http://backend.test",
    "token": "test-token",
    "timeout": 5.0,
}

EDITOR_ROLES = env_editor_roles()

DEBUG = False
TESTING = True
