"""Centralized configuration management using Pydantic Settings."""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserType(str, Enum):
    """Supported browser types."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"


@dataclass(frozen=True)
class TimeoutProfile:
    """Driver timeouts in seconds."""

    page_load: float
    implicit_wait: float
    script: float

    @classmethod
    def standard(cls, settings: "Settings | None" = None) -> "TimeoutProfile":
        """Default timeouts applied to every new driver."""
        settings = settings or get_settings()
        return cls(
            page_load=settings.page_load_timeout,
            implicit_wait=settings.implicit_wait,
            script=settings.script_timeout,
        )

    @classmethod
    def extended(cls, settings: "Settings | None" = None) -> "TimeoutProfile":
        """Longer timeouts for large payloads and slow backends."""
        settings = settings or get_settings()
        return cls(
            page_load=settings.extended_page_load_timeout,
            implicit_wait=settings.extended_implicit_wait,
            script=settings.extended_script_timeout,
        )


class Settings(BaseSettings):
    """Suite settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="herokuapp-e2e", description="Suite name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # Target application
    base_url: str = Field(
        default="https://the-internet.herokuapp.com", description="Application under test"
    )
    valid_username: str = Field(default="tomsmith", description="Known-good account name")
    valid_password: str = Field(
        default="SuperSecretPassword!", description="Known-good account password"
    )

    # Selenium
    browser_type: BrowserType = Field(default=BrowserType.CHROME, description="Browser type")
    headless: bool = Field(default=True, description="Run browser in headless mode")
    page_load_timeout: float = Field(default=180, gt=0, description="Page load timeout in seconds")
    implicit_wait: float = Field(default=30, ge=0, description="Implicit wait in seconds")
    script_timeout: float = Field(default=60, gt=0, description="Async script timeout in seconds")
    extended_page_load_timeout: float = Field(
        default=300, gt=0, description="Page load timeout for large payloads"
    )
    extended_implicit_wait: float = Field(
        default=60, ge=0, description="Implicit wait for large payloads"
    )
    extended_script_timeout: float = Field(
        default=120, gt=0, description="Async script timeout for slow backends"
    )

    # Upload / retry
    upload_wait_timeout: float = Field(
        default=60, gt=0, description="Explicit wait bound for upload page and results"
    )
    retry_max_attempts: int = Field(default=3, ge=1, description="Attempts per retryable action")
    retry_delay: float = Field(default=1.0, ge=0, description="Delay between attempts")

    # Paths
    test_files_dir: Path = Field(
        default=Path("./test_files"), description="Directory for generated upload fixtures"
    )
    screenshots_dir: Path = Field(
        default=Path("./screenshots"), description="Directory for captured screenshots"
    )
    logs_dir: Path = Field(default=Path("./logs"), description="Directory for log files")

    # Live browser tests are opt-in
    run_e2e: bool = Field(default=False, description="Run tests against a real browser")

    @field_validator("extended_page_load_timeout")
    @classmethod
    def validate_extended_page_load(cls, v: float, info) -> float:
        """Ensure the extended page load timeout is not shorter than the standard one."""
        if v < info.data.get("page_load_timeout", 0):
            raise ValueError("extended_page_load_timeout must be >= page_load_timeout")
        return v

    @field_validator("extended_implicit_wait")
    @classmethod
    def validate_extended_implicit_wait(cls, v: float, info) -> float:
        """Ensure the extended implicit wait is not shorter than the standard one."""
        if v < info.data.get("implicit_wait", 0):
            raise ValueError("extended_implicit_wait must be >= implicit_wait")
        return v

    @field_validator("extended_script_timeout")
    @classmethod
    def validate_extended_script_timeout(cls, v: float, info) -> float:
        """Ensure the extended script timeout is not shorter than the standard one."""
        if v < info.data.get("script_timeout", 0):
            raise ValueError("extended_script_timeout must be >= script_timeout")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def url(self, path: str = "/") -> str:
        """Build an absolute URL on the application under test."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    @property
    def secure_url(self) -> str:
        """Landing page after a successful login."""
        return self.url("/secure")

    @property
    def home_url(self) -> str:
        return self.url("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
