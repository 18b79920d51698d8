"""
Configuración centralizada con Pydantic Settings.

Todas las variables se pueden sobrescribir con variables de entorno
o con un archivo `.env` en la raíz del proyecto.
"""
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración global del despacho.
    """

    # =========================================================
    # ENTORNO Y DEPLOYMENT
    # =========================================================

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Entorno de ejecución"
    )

    debug: bool = Field(default=False, description="Modo debug (solo para development)")

    app_name: str = Field(default="Despacho de Abogados API")

    app_version: str = Field(default="1.0.0")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
        description="Orígenes permitidos para el front end (SPA)",
    )

    # =========================================================
    # DATABASE
    # =========================================================

    database_url: str = Field(
        default="sqlite:///./runtime/db/despacho.db",
        description="URL de conexión a base de datos",
    )

    # =========================================================
    # PATHS Y DIRECTORIOS
    # =========================================================

    reports_dir: Path = Field(
        default=Path("runtime/reportes"),
        description="Directorio base donde se guardan los informes generados",
    )

    logs_dir: Path = Field(default=Path("runtime/logs"), description="Directorio de logs")

    # =========================================================
    # INFORMES PDF
    # =========================================================

    firm_name: str = Field(default="DESPACHO DE ABOGADOS")

    firm_tagline: str = Field(default="Gestion Juridica Profesional")

    confidentiality_notice: str = Field(
        default="Despacho de Abogados - Documento confidencial"
    )

    report_uploader: str = Field(
        default="Sistema",
        description="Marca de origen para documentos generados por el sistema",
    )

    # =========================================================
    # OBSERVABILIDAD
    # =========================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # =========================================================
    # VALIDACIONES CUSTOM
    # =========================================================

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Valida formato de URL de base de datos."""
        if not v.startswith(("sqlite:///", "postgresql")):
            raise ValueError("database_url debe empezar con sqlite:/// o postgresql")
        return v

    @field_validator("debug")
    @classmethod
    def validate_debug(cls, v: bool, info) -> bool:
        """Debug debe estar deshabilitado en producción."""
        if info.data.get("environment") == "production" and v:
            raise ValueError("DEBUG debe estar deshabilitado en producción")
        return v

    # =========================================================
    # PROPIEDADES COMPUTADAS
    # =========================================================

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        # Ruta absoluta para que funcione independientemente del cwd
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )


# =========================================================
# INSTANCIA GLOBAL (SINGLETON)
# =========================================================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Obtiene la instancia global de configuración (singleton).

    Returns:
        Settings: Configuración global validada
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


# Atajo para importación
settings = get_settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para tests).
    """
    global _settings, settings
    _settings = None
    settings = get_settings()
    return settings
