"""Application settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    bot_token: str = ""  # Required at startup
    port: Optional[int] = None  # Required at startup
    host: str = "0.0.0.0"
    webhook_url: str = ""  # Set -> webhook mode, empty -> polling mode
    webhook_secret_token: str = ""
    debug_mode: bool = False
    storage_dir: str = "var/pdf_unlock_bot"
    max_file_size_bytes: int = 20 * 1024 * 1024  # 20 MiB
    decryptor_backend: str = "pikepdf"  # pikepdf or qpdf
    qpdf_binary: str = "qpdf"
    decryption_timeout_seconds: float = 60.0
    stale_file_max_age_seconds: int = 3600
    polling_timeout_seconds: int = 30
    update_idempotency_enabled: bool = False
    update_idempotency_ttl_seconds: int = 3600
    redis_url: str = "redis://localhost:6379/0"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )

    @property
    def webhook_path(self) -> str:
        """Webhook route path derived from the bot token."""
        return f"/bot{self.bot_token}"

    @property
    def use_webhook(self) -> bool:
        """Whether updates are pushed to the webhook instead of polled."""
        return bool(self.webhook_url)

    def validate_runtime(self) -> None:
        """
        Check options required to run the bot.

        Raises:
            ValueError: If the bot token or listen port is missing
        """
        if not self.bot_token or not self.port:
            raise ValueError("BOT_TOKEN and PORT are required")


settings = Settings()
