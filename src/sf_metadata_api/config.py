import shlex
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")
    static_dir: Path = Field(default=PROJECT_ROOT / "public", alias="STATIC_DIR")

    deploy_command: str = Field(default="sfdx", alias="DEPLOY_COMMAND")
    deploy_wait_minutes: int = Field(default=10, alias="DEPLOY_WAIT_MINUTES")
    deploy_verbose: bool = Field(default=True, alias="DEPLOY_VERBOSE")
    metadata_api_version: str = Field(default="58.0", alias="METADATA_API_VERSION")

    staging_root: Path | None = Field(default=None, alias="STAGING_ROOT")
    staging_keep: bool = Field(default=False, alias="STAGING_KEEP")

    def deploy_command_args(self) -> list[str]:
        args = shlex.split(self.deploy_command)
        return args or ["sfdx"]

    def cors_origins(self) -> list[str]:
        origins = [item.strip() for item in self.cors_allow_origins.split(",") if item.strip()]
        return origins or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
