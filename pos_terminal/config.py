from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (or a .env file).

    Printer settings point at a network ESC/POS printer; receipt settings
    control the merchant text printed on every ticket.
    """

    PROJECT_NAME: str = "POS Terminal"
    VERSION: str = "1.0.0"

    # Database
    DATABASE_URL: str = "sqlite:///./pos.db"
    SQL_ECHO: bool = False
    SEED_CATALOG: bool = True

    # Printer
    PRINTER_IP: str = "192.168.1.100"
    PRINTER_PORT: int = 9100
    PRINTER_TIMEOUT: float = 60
    CASH_DRAWER_PIN: int = 2

    # Receipt layout
    RECEIPT_WIDTH: int = 48
    RECEIPT_HEADER: list[str] = ["BETTERS FABRICA", "DE TECNOLOGIA S.A."]
    RECEIPT_SUBHEADER: list[str] = ["RUC: 20123456789", "Av. Tecnológica 123, Lima"]
    RECEIPT_FOOTER: list[str] = ["¡Gracias por su compra!", "Vuelva pronto"]
    CURRENCY_SYMBOL: str = "$"

    # Web
    STATIC_DIR: Optional[str] = None
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader."""
    return Settings()
