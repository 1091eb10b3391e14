"""
Configuration management for the gateway connection.
Loads config from database with file fallback.
"""

import json
import os
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ahactl.models.config import AppConfig
from ahactl.models.database import ConfigStore

CONFIG_FILE = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "config.json"
)


class ConfigManager:
    """Manages loading and saving the application configuration."""

    def __init__(self, db_session: AsyncSession, config_path: str = CONFIG_FILE):
        self.db = db_session
        self.config_path = config_path

    async def load_config(self) -> AppConfig:
        """
        Load configuration from database or file fallback.

        Priority:
        1. Database (config_store table)
        2. config.json file in project root
        3. Raise error if neither exists

        Returns:
            Validated AppConfig instance

        Raises:
            FileNotFoundError: If no config found in DB or file
            pydantic.ValidationError: If config validation fails
        """
        result = await self.db.execute(
            select(ConfigStore).where(ConfigStore.id == 1)
        )
        config_row = result.scalar_one_or_none()

        if config_row:
            return AppConfig(**json.loads(config_row.config_json))

        if os.path.exists(self.config_path):
            return load_config_from_file(self.config_path)

        raise FileNotFoundError(
            "No configuration found in database or config.json file"
        )

    async def save_config(self, config: AppConfig) -> bool:
        """
        Save configuration to database (UPSERT on the single row).

        Args:
            config: Validated AppConfig instance

        Returns:
            True if successful
        """
        config_json = config.model_dump_json(indent=2)

        stmt = pg_insert(ConfigStore).values(
            id=1,
            config_json=config_json
        ).on_conflict_do_update(
            index_elements=['id'],
            set_={'config_json': config_json}
        )

        await self.db.execute(stmt)
        await self.db.commit()
        return True


def load_config_from_file(filepath: str) -> AppConfig:
    """
    Load and validate configuration from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        pydantic.ValidationError: If validation fails
    """
    with open(filepath, 'r') as f:
        config_data = json.load(f)

    return AppConfig(**config_data)
