from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR, DB_FILENAME, DEFAULT_CURRENCY).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Trackify"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "trackify.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Display currency used until the user picks one
    default_currency: str = "USD"

    # Budget applied when nothing has been saved yet
    default_monthly_budget: float = 5000.0

    # Trend windows
    monthly_trend_months: int = 6
    daily_trend_days: int = 30

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        # Ensure persistence directory exists
        self.data_dir.mkdir(parents=True, exist_ok=True)
        # Imported lazily; the models package reads settings for defaults.
        from trackify.models.currency import CURRENCY_CODES

        self.default_currency = self.default_currency.upper()
        if self.default_currency not in CURRENCY_CODES:
            raise ValueError(
                f"Unsupported default_currency '{self.default_currency}'. Allowed: {sorted(CURRENCY_CODES)}"
            )
        if self.default_monthly_budget < 0:
            raise ValueError("default_monthly_budget cannot be negative")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
