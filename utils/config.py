"""
Unified configuration management with Pydantic validation.
Loads and validates all environment variables.
"""

from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class Config(BaseSettings):
    """Application configuration with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ========================
    # Branding Configuration
    # ========================
    brand_name: str = Field(default="RugQC", alias="BRAND_NAME")
    brand_tagline: str = Field(
        default="Automated Quality Inspection Platform",
        alias="BRAND_TAGLINE"
    )
    report_footer: str = Field(
        default="This report is confidential and intended for authorized personnel only.",
        alias="REPORT_FOOTER"
    )
    default_company_name: str = Field(default="", alias="DEFAULT_COMPANY_NAME")
    default_aql_label: str = Field(default="2.5", alias="DEFAULT_AQL_LABEL")

    # ========================
    # Report Layout Configuration
    # ========================
    description_max_chars: int = Field(default=48, alias="DESCRIPTION_MAX_CHARS")
    item_name_max_chars: int = Field(default=56, alias="ITEM_NAME_MAX_CHARS")
    photo_label_max_chars: int = Field(default=24, alias="PHOTO_LABEL_MAX_CHARS")
    badge_max_chars: int = Field(default=30, alias="BADGE_MAX_CHARS")
    extra_known_sections: str = Field(default="Packing", alias="EXTRA_KNOWN_SECTIONS")

    # ========================
    # File Storage Configuration
    # ========================
    report_dir: str = Field(default="reports", alias="REPORT_DIR")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    # ========================
    # Logging Configuration
    # ========================
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    # ========================
    # Development Configuration
    # ========================
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # ========================
    # Validators
    # ========================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment."""
        valid_envs = ["development", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of {valid_envs}")
        return v.lower()

    @field_validator(
        "description_max_chars", "item_name_max_chars", "photo_label_max_chars", "badge_max_chars"
    )
    @classmethod
    def validate_label_budget(cls, v: int, info) -> int:
        """Label budgets must leave room for the truncation marker."""
        if v < 4:
            raise ValueError(f"{info.field_name} must be at least 4")
        return v

    # ========================
    # Helper Properties
    # ========================

    @property
    def extra_known_sections_list(self) -> List[str]:
        """Get extra known checklist sections as list."""
        return [s.strip() for s in self.extra_known_sections.split(",") if s.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def get_report_dir(self) -> Path:
        """Get report directory as Path object."""
        path = Path(self.report_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def get_log_dir(self) -> Path:
        """Get log directory as Path object."""
        path = Path(self.log_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path


def get_config() -> Config:
    """
    Load and validate configuration.
    Exits if configuration is invalid.
    """
    try:
        return Config()

    except ValidationError as e:
        print("\n❌ Configuration Error:")
        print("=" * 60)
        for error in e.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            print(f"\n Field: {field}")
            print(f"  Error: {error['msg']}")
            if "input" in error:
                print(f"  Value: {error['input']}")
        print("\n" + "=" * 60)
        print("\nPlease check your .env file and fix the errors above.")
        print("See .env.example for reference.\n")
        raise SystemExit(1)


# Global configuration instance
config = get_config()
