from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os
import json


class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = ""
    # CORS origins - can be a JSON array or a comma-separated string
    cors_origins: str = "*"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_schema: str = "public"

    model_config = SettingsConfigDict(
        env_file=f"config/{os.getenv('ENV', 'local')}.env",
        case_sensitive=False,
        extra="ignore",
    )

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list, accepting JSON or comma-separated values."""
        try:
            origins = json.loads(self.cors_origins)
        except (json.JSONDecodeError, ValueError):
            origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]

        return origins if isinstance(origins, list) else [origins]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
