import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="TRIPBILL_", extra="ignore")

    brand_name: str = "Tripomaniac"
    brand_tagline: str = "Premium Travel Experiences"
    document_title: str = "Travel Invoice"
    footer_lines: list[str] = [
        "Thank you for choosing Tripomaniac for your travel needs.",
        "This is a computer generated invoice and does not require signature.",
    ]

    customer_id_prefix: str = "TM-"

    storage_backend: str = "local"
    storage_local_path: str = "./invoices"
    storage_prefix: str = "invoices"

    # Overrides the bundled DejaVu Sans. Fallbacks cover scripts the body font lacks.
    pdf_font_path: str = ""
    pdf_fallback_font_paths: list[str] = []

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
