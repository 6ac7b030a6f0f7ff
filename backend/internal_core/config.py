from __future__ import annotations

import os
from dataclasses import dataclass


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _getenv_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class AppConfig:
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    MINUTES_TRANSCRIBE_MODEL: str = "whisper-1"
    MINUTES_TRANSCRIBE_LANGUAGE: str = "en"
    MINUTES_CHAT_MODEL: str = "gpt-4o-mini"
    MINUTES_CHAT_TEMPERATURE: float = 0.3
    MINUTES_CHAT_MAX_TOKENS: int = 4000
    MINUTES_VENDOR_TIMEOUT_SECONDS: float = 120.0
    MINUTES_MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024
    MINUTES_ORG_NAME: str = "Corrales Bosque Gallery"
    MINUTES_ORG_SHORT_NAME: str = "CBG"
    MINUTES_DEFAULT_LOCATION: str = "Gallery"
    MINUTES_LOG_LEVEL: str = "INFO"
    MINUTES_CORS_ORIGINS: tuple[str, ...] = ("*",)

    @property
    def has_vendor_credentials(self) -> bool:
        return bool(self.OPENAI_API_KEY.strip())


def load_config() -> AppConfig:
    defaults = AppConfig()
    return AppConfig(
        OPENAI_API_KEY=_getenv_str("OPENAI_API_KEY", defaults.OPENAI_API_KEY),
        OPENAI_BASE_URL=_getenv_str("OPENAI_BASE_URL", defaults.OPENAI_BASE_URL).rstrip("/"),
        MINUTES_TRANSCRIBE_MODEL=_getenv_str(
            "MINUTES_TRANSCRIBE_MODEL", defaults.MINUTES_TRANSCRIBE_MODEL
        ),
        MINUTES_TRANSCRIBE_LANGUAGE=_getenv_str(
            "MINUTES_TRANSCRIBE_LANGUAGE", defaults.MINUTES_TRANSCRIBE_LANGUAGE
        ),
        MINUTES_CHAT_MODEL=_getenv_str("MINUTES_CHAT_MODEL", defaults.MINUTES_CHAT_MODEL),
        MINUTES_CHAT_TEMPERATURE=_getenv_float(
            "MINUTES_CHAT_TEMPERATURE", defaults.MINUTES_CHAT_TEMPERATURE
        ),
        MINUTES_CHAT_MAX_TOKENS=_getenv_int("MINUTES_CHAT_MAX_TOKENS", defaults.MINUTES_CHAT_MAX_TOKENS),
        MINUTES_VENDOR_TIMEOUT_SECONDS=_getenv_float(
            "MINUTES_VENDOR_TIMEOUT_SECONDS", defaults.MINUTES_VENDOR_TIMEOUT_SECONDS
        ),
        MINUTES_MAX_UPLOAD_BYTES=_getenv_int("MINUTES_MAX_UPLOAD_BYTES", defaults.MINUTES_MAX_UPLOAD_BYTES),
        MINUTES_ORG_NAME=_getenv_str("MINUTES_ORG_NAME", defaults.MINUTES_ORG_NAME),
        MINUTES_ORG_SHORT_NAME=_getenv_str("MINUTES_ORG_SHORT_NAME", defaults.MINUTES_ORG_SHORT_NAME),
        MINUTES_DEFAULT_LOCATION=_getenv_str(
            "MINUTES_DEFAULT_LOCATION", defaults.MINUTES_DEFAULT_LOCATION
        ),
        MINUTES_LOG_LEVEL=_getenv_str("MINUTES_LOG_LEVEL", defaults.MINUTES_LOG_LEVEL),
        MINUTES_CORS_ORIGINS=_getenv_list("MINUTES_CORS_ORIGINS", defaults.MINUTES_CORS_ORIGINS),
    )
