"""
Configuration module for the tuber downloader CLI.

This module centralizes environment variables, constants, and runtime configuration
using pydantic-settings for type-safe configuration management. Command-line flags
override anything loaded here.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SUMMARY_PROMPT = (
    "Summarize this transcript of a YouTube video. "
    "Provide a concise summary of the main points and key takeaways."
)

YTDLP_INSTALL_URL = "https://github.com/yt-dlp/yt-dlp"
SUMMARIZER_INSTALL_URL = "https://claude.ai/download"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # yt-dlp Configuration
    ytdlp_binary: str = Field(
        default="yt-dlp",
        validation_alias="YTDLP_BINARY",
        description="Name or path of the yt-dlp executable"
    )

    ytdlp_timeout: Optional[int] = Field(
        default=None,
        validation_alias="YTDLP_TIMEOUT",
        description="Seconds before a yt-dlp invocation is abandoned (unset = no limit)"
    )

    subtitle_lang: str = Field(
        default="en",
        validation_alias="SUBTITLE_LANG",
        description="Subtitle language requested from yt-dlp"
    )

    # Summarizer Configuration
    summarizer_binary: str = Field(
        default="claude",
        validation_alias="SUMMARIZER_BINARY",
        description="Name or path of the summarization CLI (invoked as `<binary> -p <prompt>`)"
    )

    summary_prompt: str = Field(
        default=DEFAULT_SUMMARY_PROMPT,
        validation_alias="SUMMARY_PROMPT",
        description="Prompt used when no custom summary prompt is given"
    )

    # Output Configuration
    output_dir: str = Field(
        default=".",
        validation_alias="TUBER_OUTPUT_DIR",
        description="Directory downloads are written to"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        validation_alias="TUBER_LOG_LEVEL",
        description="Log level for diagnostic output on stderr"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()
