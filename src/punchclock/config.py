"""Configuration management for punchclock."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# punchclock config directory
PUNCHCLOCK_DIR_NAME = ".punchclock"
SHEET_FILE_NAME = "sheet.json"


def _env_files() -> tuple[str, ...]:
    try:
        return (str(Path.home() / PUNCHCLOCK_DIR_NAME / ".env"), ".env")
    except RuntimeError:
        return (".env",)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PUNCHCLOCK_",
        # Later files override earlier ones
        env_file=_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sheet_path: Path | None = Field(
        default=None,
        description="Path of the sheet file (default: ~/.punchclock/sheet.json)",
    )
    create_if_missing: bool = Field(
        default=True,
        description="Create an empty sheet file on first load if none exists",
    )
    lock_timeout: float = Field(
        default=-1,
        description="Seconds to wait for the sheet file lock (-1 waits forever)",
    )

    def get_sheet_path(self) -> Path:
        """Get the sheet path, using the default if not set.

        Raises:
            RuntimeError: If no path is configured and the home directory
                cannot be determined.
        """
        if self.sheet_path:
            return Path(self.sheet_path).expanduser()
        return Path.home() / PUNCHCLOCK_DIR_NAME / SHEET_FILE_NAME


# Global settings instance
settings = Settings()
