"""
config.py — Konfiguracja interpretera przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks FINT_.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "WARNING"

    # Wyjście: liczba cyfr znaczących przy wypisywaniu zmiennych
    output_precision: int = Field(default=8, ge=1, le=17)

    # API
    max_source_chars: int = 100_000

    # App
    app_title: str = "FINT"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="FINT_", env_file=".env", extra="ignore")
