"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables
  - Fall back to a .env file in the working directory
  - Validate types and constraints before any input is read

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so READER__BACKEND maps to
reader.backend and EXTRACTION__MIN_BASE64_RUN to extraction.min_base64_run.

Command-line options override these values (see main.py).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReaderSettings(BaseModel):
    """
    Which certificate reader inspects subject/issuer/validity.

    "openssl" runs the openssl binary (the default, matches what users
    paste from `openssl x509` output); "cryptography" parses in-process.
    """

    backend: Literal["openssl", "cryptography"] = Field(default="openssl")
    openssl_binary: str = Field(default="openssl", min_length=1)


class ExtractionSettings(BaseModel):
    """Tuning for the bare-base64 extraction strategy."""

    min_base64_run: int = Field(
        default=200,
        ge=1,
        description="Minimum length of a base64/whitespace run to count as a certificate",
    )


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    output_dir: Path = Field(default=Path("out"))
    document_name: str = Field(default="upload-ready.json")
    log_level: str = Field(default="INFO")
    reader: ReaderSettings = Field(default_factory=ReaderSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)

    @field_validator("document_name")
    @classmethod
    def validate_document_name(cls, value: str) -> str:
        """The structured document is JSON and lives directly in output_dir."""
        if not value.endswith(".json") or "/" in value or "\\" in value:
            raise ValueError(f"document_name must be a plain *.json file name, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level
