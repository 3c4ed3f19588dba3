from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Reference data
    DATA_DIR: Path = DEFAULT_DATA_DIR
    REFERENCE_STATION_CODE: str = "260"  # De Bilt

    # Planning
    ROTATION_TOLERANCE_CM: float = 10.0
    WATERING_RAIN_SKIP_MM: float = 20.0
    WATERING_HEAT_C: float = 25.0

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
