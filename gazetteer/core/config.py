from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import List, Union
from functools import lru_cache


class Settings(BaseSettings):
    app_name: str = "Gazetteer API"
    app_env: str = "dev"

    # Dataset GeoNames (tab-separated, >= 18 colunas por linha)
    dataset_path: Path = Path("RU.txt")
    dataset_encoding: str = "utf-8"

    # Paginação
    default_per_page: int = 10

    # Servidor (usado apenas por `gazetteer-api`)
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS - por padrão qualquer origem (Access-Control-Allow-Origin: *)
    cors_origins: Union[List[str], str] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS_ORIGINS de string separada por vírgula para lista."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_dev(self) -> bool:
        """Verifica se está em ambiente de desenvolvimento."""
        return self.app_env.lower() == "dev"

    @property
    def debug(self) -> bool:
        return self.is_dev

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )


@lru_cache()
def get_settings() -> Settings:
    """Retorna instância singleton das configurações."""
    return Settings()


settings = get_settings()
