"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Core components never read settings directly; the wiring layer
  (service_manager) passes values into constructors
- List settings (BLOCKED_DOMAINS, SELF_DOMAINS) are given as JSON arrays
  in the environment, e.g. BLOCKED_DOMAINS='["spam.io"]'
"""

from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level"
    )

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL for generating short URLs"
    )
    SHORT_CODE_LENGTH: int = Field(
        default=6,
        description="Length of generated short codes (non-positive falls back to 6)"
    )
    MAX_CODE_GENERATION_ATTEMPTS: int = Field(
        default=5,
        description="How many times a colliding short code is regenerated before failing"
    )

    # URL Validation
    ENFORCE_HTTPS: bool = Field(
        default=True,
        description="Upgrade http:// URLs to https:// before storing them"
    )
    MAX_URL_LENGTH: int = Field(
        default=2048,
        description="Longest URL accepted for shortening"
    )
    BLOCKED_DOMAINS: List[str] = Field(
        default_factory=lambda: ["example.com", "malicious.com"],
        description="Domains (and their subdomains) that cannot be shortened"
    )
    SELF_DOMAINS: List[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Hosts serving this shortener; the BASE_URL host is always included"
    )

    # Domain Ranking
    TOP_DOMAINS_DEFAULT_LIMIT: int = Field(
        default=3,
        description="Number of domains returned when no positive limit is requested"
    )
    RANKING_WORKERS: int = Field(
        default=2,
        description="Worker threads applying domain count increments (0 = apply inline)"
    )
    RANKING_QUEUE_SIZE: int = Field(
        default=1000,
        description="Pending increments held before falling back to inline application"
    )
    RANKING_MAX_ATTEMPTS: int = Field(
        default=3,
        description="Attempts per increment before the failure is logged and dropped"
    )

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Enable per-IP rate limiting of the HTTP endpoints"
    )

    @property
    def self_hosts(self) -> List[str]:
        """SELF_DOMAINS plus the host this service is reachable under."""
        hosts = [host.lower() for host in self.SELF_DOMAINS]
        base_host = urlsplit(self.BASE_URL).hostname
        if base_host and base_host.lower() not in hosts:
            hosts.append(base_host.lower())
        return hosts


settings = Settings()
