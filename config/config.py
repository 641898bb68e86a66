import os


def env_api_config(default_base_url: str) -> dict:
    """Backend connection settings shared by every environment."""
    return {
        "base_url": os.getenv("API_BASE_URL", default_base_url),
        "token": os.getenv("API_TOKEN", ""),
        "timeout": float(os.getenv("REQUEST_TIMEOUT", "30")),
    }


def env_editor_roles(default: str = "admin,hr") -> list:
    raw = os.getenv("EDITOR_ROLES", default)
    return [r.strip().lower() for r in raw.split(",") if r.strip()]
