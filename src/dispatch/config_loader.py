"""Configuration loader for the mail dispatch module.

Non-secret settings (sender display name, timeout) come from YAML through
Pydantic models. SMTP connection settings and credentials come from the
environment (SMTP_HOST, SMTP_PORT, SMTP_SECURE, SMTP_USER, SMTP_PASS).
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SMTPSettings(BaseSettings):
    """SMTP connection settings loaded from environment variables.

    Attributes:
        host: SMTP server hostname (SMTP_HOST)
        port: SMTP server port (SMTP_PORT, default 587)
        secure: Use implicit TLS, typically port 465 (SMTP_SECURE)
        user: Login user, also used as sender address (SMTP_USER)
        password: Login password (SMTP_PASS)
    """

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = ""
    port: int = 587
    secure: bool = False
    user: str = ""
    password: str = Field(default="", validation_alias=AliasChoices("SMTP_PASS", "password"))

    def missing_fields(self) -> List[str]:
        """List the environment variables that still need a value.

        Returns:
            Names of missing variables (empty if the settings are complete).
        """
        missing = []
        if not self.host:
            missing.append("SMTP_HOST")
        if not self.user:
            missing.append("SMTP_USER")
        if not self.password:
            missing.append("SMTP_PASS")
        return missing


class DispatchModuleConfig(BaseModel):
    """Mail dispatch configuration.

    Attributes:
        sender_name: Display name of the sender
        timeout_s: Upper bound for one send operation in seconds
    """

    sender_name: str = "Reissue Request System"
    timeout_s: float = Field(default=60.0, gt=0.0)


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        dispatch: Dispatch module configuration
    """

    dispatch: DispatchModuleConfig = Field(default_factory=DispatchModuleConfig)


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        pydantic.ValidationError: If configuration validation fails
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    if "dispatch" in config_dict:
        config_dict = config_dict["dispatch"] or {}

    return Config(dispatch=DispatchModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file."""
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        return Config()
