"""
Routedoc — Application Configuration
======================================

What:  Server and document settings, read from ROUTEDOC_* environment
       variables or a .env file.
How:   One `Settings` instance is created at import. The app factory and the
       CLI read from it; `routedoc serve` copies it with CLI overrides.
When:  Invalid values fail at import, before any route tree is built.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_PACKAGE_ROOT = Path(__file__).resolve().parent
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default. Attributes are grouped by concern.
    """

    # ── API Document ──────────────────────────────────────────────────────
    api_title: str = Field(default="Swagger Petstore", description="info.title of the document")
    api_version: str = Field(default="1.0.0", description="info.version of the document")
    api_description: str = Field(
        default="Petstore routes whose declarations double as their OpenAPI description.",
    )

    # What: Print the aggregated document to stdout once the route tree is built
    print_openapi_on_startup: bool = Field(default=False)

    # What: Serve the document and a viewer page next to the API
    serve_docs: bool = Field(default=True)
    openapi_path: str = Field(default="/openapi.json")
    docs_path: str = Field(default="/docs")

    # What: Local HTML page served at docs_path; it loads openapi_path
    docs_file: Path = Field(default=_PACKAGE_ROOT / "static" / "docs.html")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1024, le=65535)

    log_level: str = Field(default="INFO", description="Root logger level name")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("openapi_path", "docs_path")
    @classmethod
    def validate_mount_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"Mount path '{v}' must start with '/'")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "ROUTEDOC_",
    }


settings = Settings()
