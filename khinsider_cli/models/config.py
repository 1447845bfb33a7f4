"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_MIRROR_PREFIX = "https://delta.vgmsite.com/"
DEFAULT_CANONICAL_PREFIX = "https://vgmsite.com/"


def default_downloads_root() -> Path:
    """The user's Downloads folder."""
    return Path.home() / "Downloads"


class DownloadConfig(BaseModel):
    """A validated configuration model for the application."""

    # Destination
    downloads_root: Path = Field(default_factory=default_downloads_root)
    audio_extension: str = "flac"
    sanitize_paths: bool = False

    # Artwork
    all_images: bool = False

    # Mirror rewriting
    mirror_prefix: str = DEFAULT_MIRROR_PREFIX
    canonical_prefix: str = DEFAULT_CANONICAL_PREFIX

    # Network
    max_attempts: int = 3
    connect_timeout: float = 15.0
    read_timeout: float = 90.0
    chunk_size: int = 131072  # 128 KB

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("downloads_root")
    @classmethod
    def expand_downloads_root(cls, v: Path) -> Path:
        """Expands '~' so the folder can be used directly."""
        return v.expanduser()

    @field_validator("audio_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Accepts 'flac' or '.flac' and stores it without the dot."""
        v = v.lstrip(".")
        if not v or "/" in v or "\\" in v:
            raise ValueError("Audio extension must be a plain file extension.")
        return v

    @field_validator("mirror_prefix", "canonical_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Ensures a host prefix looks like an HTTP(S) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Host prefix must start with http:// or https://: {v}")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        """Ensures a reasonable number of request attempts."""
        if v < 1 or v > 10:
            raise ValueError("Max attempts must be between 1 and 10.")
        return v

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive.")
        return v

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        if v < 1024:
            raise ValueError("Chunk size must be at least 1024 bytes.")
        return v

    @model_validator(mode="after")
    def validate_prefix_pair(self) -> "DownloadConfig":
        """A mirror that rewrites to itself is almost certainly a typo."""
        if self.mirror_prefix == self.canonical_prefix:
            raise ValueError("Mirror prefix and canonical prefix must differ.")
        return self

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
