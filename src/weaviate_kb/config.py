"""Environment-driven settings shared by the CLI entry points."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_WEAVIATE_URL = "http://localhost:8080"
DEFAULT_GRPC_PORT = 50051


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""
    weaviate_url: str = DEFAULT_WEAVIATE_URL
    openai_api_key: Optional[str] = None
    log_level: str = "INFO"
    grpc_port: int = DEFAULT_GRPC_PORT


def load_settings(weaviate_url: Optional[str] = None) -> Settings:
    """
    Load settings from the environment, honouring a local .env file.

    Args:
        weaviate_url: Explicit URL that takes precedence over WEAVIATE_URL

    Returns:
        Settings instance with a normalized database URL
    """
    load_dotenv()
    url = weaviate_url or os.getenv("WEAVIATE_URL") or DEFAULT_WEAVIATE_URL
    return Settings(
        weaviate_url=url.rstrip("/"),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        log_level=os.getenv("WEAVIATE_KB_LOG_LEVEL", "INFO").upper(),
        grpc_port=int(os.getenv("WEAVIATE_GRPC_PORT") or DEFAULT_GRPC_PORT),
    )
