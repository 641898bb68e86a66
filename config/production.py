import os

from config.config import env_api_config, env_editor_roles

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = env_api_config("http://localhost:8000")

EDITOR_ROLES = env_editor_roles()

DEBUG = bool(int(os.getenv("DEBUG", "0")))
