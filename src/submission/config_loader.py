"""Configuration loader with Pydantic validation for submission module.

Controls the subject line, the size of emailed image attachments and the
summary QR code.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class AttachmentConfig(BaseModel):
    """Emailed image attachment configuration.

    Attributes:
        max_width: Maximum attachment width (pixels)
        max_height: Maximum attachment height (pixels)
        jpeg_quality: JPEG quality of attachments (1-95)
    """

    max_width: int = Field(default=1200, gt=0)
    max_height: int = Field(default=1200, gt=0)
    jpeg_quality: int = Field(default=60, ge=1, le=95)


class QRConfig(BaseModel):
    """Summary QR code configuration.

    Attributes:
        enabled: Attach and embed a QR code of all recognized codes
        width: QR image width in pixels
        border: Quiet-zone width in modules
    """

    enabled: bool = True
    width: int = Field(default=300, gt=0)
    border: int = Field(default=2, ge=0)


class SubmissionModuleConfig(BaseModel):
    """Submission module configuration.

    Attributes:
        subject_prefix: Prefix of the email subject line
        attachments: Image attachment settings
        qr: QR code settings
    """

    subject_prefix: str = "[Reissue Request]"
    attachments: AttachmentConfig = Field(default_factory=AttachmentConfig)
    qr: QRConfig = Field(default_factory=QRConfig)


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        submission: Submission module configuration
    """

    submission: SubmissionModuleConfig = Field(default_factory=SubmissionModuleConfig)


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

    if "submission" in config_dict:
        config_dict = config_dict["submission"] or {}

    return Config(submission=SubmissionModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file."""
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        return Config()
