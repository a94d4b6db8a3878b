"""Configuration and environment settings"""

from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path


class Settings(BaseSettings):
    """Application configuration"""

    # Environment tier written to the metadata sheet
    DEV_TIER: str = "N/A"

    # Workbook properties
    WORKBOOK_CREATOR: str = "CRDC Submission Portal"
    WORKBOOK_TITLE: str = "CRDC Submission Request"
    WORKBOOK_SUBJECT: str = "CRDC Submission Request Template"
    WORKBOOK_COMPANY: str = "National Cancer Institute"

    # Minimum rows that receive validation in repeating columns
    RECORD_VALIDATION_ROWS: int = 25

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Output
    OUTPUT_DIR: str = "./output"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    def get_output_path(self, subdir: str = "") -> Path:
        """Get output directory path"""
        path = Path(self.OUTPUT_DIR) / subdir
        path.mkdir(parents=True, exist_ok=True)
        return path


settings = Settings()
