"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import os
from pathlib import Path
from typing import Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict
from service_tracker.domain.models import LedgerPreferences


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='SERVICETRACKER_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Application paths
    app_name: str = "ServiceTracker"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None
    config_file: Optional[Path] = None

    # Storage
    database_url: Optional[str] = None
    records_file: Optional[Path] = None

    # User preferences
    preferences: LedgerPreferences = LedgerPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

        if self.data_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.local' / 'share'
            self.data_dir = base / self.app_name.lower()

        # Create directories if they don't exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _find_config_file(self) -> Optional[Path]:
        if self.config_file is not None:
            return self.config_file

        # First check in workspace config folder
        config_file = Path("config/settings.yaml")
        if not config_file.exists():
            # Then check in user's config directory
            config_file = self.config_dir / "settings.yaml"
        return config_file

    def _load_yaml_config(self):
        """Load preferences from YAML file"""
        config_file = self._find_config_file()

        if config_file is not None and config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
                if config_data:
                    # Update preferences with YAML data
                    self.preferences = LedgerPreferences(**config_data)

    def save_preferences(self):
        """Save current preferences to YAML file"""
        config_file = self.config_file or self.config_dir / "settings.yaml"
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False)

    def get_db_url(self) -> str:
        """Get database URL, creating default if not set"""
        if self.database_url:
            return self.database_url

        db_path = self.data_dir / 'servicetracker.db'
        return f"sqlite+aiosqlite:///{db_path}"

    def get_records_path(self) -> Path:
        """Get the JSON record file path"""
        if self.records_file:
            return self.records_file
        return self.data_dir / 'records.json'

    def get_export_dir(self) -> Path:
        """Get the spreadsheet export directory"""
        if self.preferences.export_directory:
            export_dir = Path(self.preferences.export_directory)
        else:
            export_dir = self.data_dir / 'exports'
        export_dir.mkdir(parents=True, exist_ok=True)
        return export_dir
