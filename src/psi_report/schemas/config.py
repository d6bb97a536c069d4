"""Configuration schema — validates the service config (YAML + environment)."""

from pydantic import BaseModel, field_validator

SUPPORTED_LOCALES = ("es-MX", "en-US")


class PdfOptions(BaseModel):
    """Page setup passed to the headless browser when printing."""

    format: str = "A4"
    print_background: bool = True
    margin: str = "20px"  # applied to all four sides
    timeout_ms: int = 30_000


class ServiceConfig(BaseModel):
    """Top-level service configuration.

    ``api_key`` may be empty (e.g. when only the CLI is used); the API then
    rejects every report request.
    """

    api_key: str = ""
    environment: str = "production"
    report_locale: str = "es-MX"

    host: str = "127.0.0.1"
    port: int = 8000

    pdf: PdfOptions = PdfOptions()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower() or "production"

    @field_validator("report_locale")
    @classmethod
    def check_locale(cls, v: str) -> str:
        if v not in SUPPORTED_LOCALES:
            raise ValueError(
                f"Unsupported report_locale {v!r}; expected one of {', '.join(SUPPORTED_LOCALES)}"
            )
        return v

    @field_validator("port")
    @classmethod
    def check_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {v}")
        return v
