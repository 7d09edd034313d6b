"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Storage (JSON / Mongo), Uploads.
"""
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Student Notebook API"
    api_prefix: str = ""  # detrás del proxy nginx se usa "/api"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    # CORS (el frontend vanilla se sirve desde otro origen)
    cors_origins: list[str] = ["http://localhost", "http://127.0.0.1", "http://localhost:8080"]
    cors_allow_any: bool = True  # Permite todos los orígenes (usa con cuidado)

    # Storage
    storage_backend: Literal["json", "mongo"] = "json"
    data_dir: Path = Path("data")
    notes_file: str = "notes.json"
    tasks_file: str = "tasks.json"

    # Uploads (adjuntos de notas)
    uploads_dir: str = "uploads"
    uploads_url: str = "/uploads"

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "notebook_db"
    notes_collection: str = "notes"
    tasks_collection: str = "tasks"
    # TLS (Atlas / SRV siempre usa TLS)
    mongo_tls: bool = False
    mongo_tls_insecure: bool = False  # allows invalid certs (dev only)
    mongo_tls_allow_invalid_hostnames: bool = False

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final
        - Si está vacío (o es solo '/'), devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref or pref == "/":
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        return pref.rstrip('/')

    @property
    def uploads_url_normalized(self) -> str:
        url = "/" + (self.uploads_url or "uploads").strip().strip("/")
        return url

    @property
    def notes_path(self) -> Path:
        return self._resolve(self.notes_file)

    @property
    def tasks_path(self) -> Path:
        return self._resolve(self.tasks_file)

    @property
    def uploads_path(self) -> Path:
        return self._resolve(self.uploads_dir)

    def _resolve(self, name: str) -> Path:
        p = Path(name)
        return p if p.is_absolute() else Path(self.data_dir) / p

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
    )


settings = Settings()
