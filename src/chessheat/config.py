"""Centralized application configuration.

All settings are read from environment variables (or a .env.chessheat
file). Nothing is required; the defaults run the strict decoder against the
standard starting position.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from chessheat.position import STARTING_PLACEMENT


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env.chessheat", env_file_encoding="utf-8",
    )

    log_level: str = "WARNING"

    # Reject ranks that do not expand to exactly 8 files. When false, an
    # overflowing rank is truncated and a short rank is padded with empties.
    strict_placement: bool = True

    # Position used by the CLI when no FEN is given
    default_fen: str = f"{STARTING_PLACEMENT} w KQkq - 0 1"

    # Number of contested squares listed in text summaries
    contested_limit: int = 5
