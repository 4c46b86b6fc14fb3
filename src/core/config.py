"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) lean config de forma consistente.
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario.

    `HOSTROUTE_CONFIG_DIR` lo fija explícitamente; si no, se usa el directorio
    de aplicación de la plataforma (`typer.get_app_dir`, respeta XDG).
    """

    override = (os.environ.get("HOSTROUTE_CONFIG_DIR") or "").strip()
    if override:
        return Path(override)
    return Path(typer.get_app_dir("hostroute"))


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los valores de la CLI se aplican encima con `model_copy(update=...)`,
    así cada ejecución trabaja con una copia inmutable y explícita.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOSTROUTE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por fase de la request (connect/read/write/pool), en segundos.",
    )
    request_deadline_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Deadline total por probe (incluye redirects), en segundos.",
    )
    max_concurrency: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Número máximo de probes en vuelo simultáneamente.",
    )
    verify_tls: bool = Field(
        default=False,
        description=(
            "Validar certificados TLS. Desactivado por defecto: los targets suelen "
            "servir certificados autofirmados o de otro dominio."
        ),
    )
    follow_redirects: bool = Field(
        default=True,
        description="Seguir redirecciones HTTP (comportamiento por defecto del cliente).",
    )
    proxy_url: str | None = Field(
        default=None,
        description="Proxy de salida (http, https, socks5, socks5h). Vacío => conexión directa.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent del Header Set por defecto.",
    )
    accept_language: str = Field(
        default=DEFAULT_ACCEPT_LANGUAGE,
        min_length=1,
        description="Accept-Language del Header Set por defecto.",
    )
