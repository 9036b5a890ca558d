import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read once at startup and never mutated."""

    access_token: str = ""
    verify_token: str = ""
    port: int = 3000
    graph_api_base: str = "https://graph.facebook.com"
    graph_api_version: str = "v13.0"
    welcome_template: str | None = None
    welcome_template_language: str = "en_US"


def load_settings():
    """Builds Settings from the environment (and a local .env file if present)."""
    load_dotenv()

    return Settings(
        access_token=os.getenv("TOKEN", ""),
        verify_token=os.getenv("VERIFY_TOKEN", ""),
        port=int(os.getenv("PORT", "3000")),
        graph_api_base=os.getenv("GRAPH_API_BASE", "https://graph.facebook.com").rstrip("/"),
        graph_api_version=os.getenv("GRAPH_API_VERSION", "v13.0"),
        # Empty string means "no welcome template"
        welcome_template=os.getenv("WELCOME_TEMPLATE") or None,
        welcome_template_language=os.getenv("WELCOME_TEMPLATE_LANGUAGE", "en_US"),
    )
