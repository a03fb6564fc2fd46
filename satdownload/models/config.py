"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_HOST = "scoresdownload.collegeboard.org"
DEFAULT_COUNTER_FILE = "satdownload.counter"


class RetrievalConfig(BaseModel):
    """A validated, immutable configuration for one retrieval run."""

    # API endpoint
    scheme: str = "https"
    host: str = DEFAULT_HOST
    port: int = 443
    verify_ssl: bool = True

    # Authentication
    username: str = ""
    password: str = Field("", repr=False)
    org_id: str = ""

    # File naming and storage
    local_directory: str = ""
    file_extension: str = "txt"
    file_num_padding: int = 6
    counter_file: str = DEFAULT_COUNTER_FILE

    # Behavior
    consecutive_mode: bool = True
    persist_progress: bool = True
    persist_after_download: bool = True

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        v = v.lower()
        if v not in ("http", "https"):
            raise ValueError("Scheme must be 'http' or 'https'.")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535.")
        return v

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Stores the extension without its leading dot."""
        v = v.lstrip(".")
        if not v:
            raise ValueError("File extension cannot be empty.")
        return v

    @field_validator("file_num_padding")
    @classmethod
    def validate_padding(cls, v: int) -> int:
        if v < 0:
            raise ValueError("File number padding cannot be negative.")
        return v

    @model_validator(mode="after")
    def validate_required_settings(self) -> "RetrievalConfig":
        """Validates that credentials, organization and storage are configured."""
        missing = [
            key
            for key in ("username", "password", "org_id", "local_directory")
            if not getattr(self, key)
        ]
        if missing:
            raise ValueError(f"Missing required settings: {', '.join(missing)}.")
        return self

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that may appear in the INI file."""
        return set(cls.model_fields)
