"""
Secrets manager for database-backed credential storage.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

from ahactl.models.database import Secret


class SecretsManager:
    """
    Key/value access to the secrets table.

    Keys in use:
    - gateway_sid
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def get(self, key: str) -> Optional[str]:
        """Secret value, or None if not stored."""
        result = await self.db.execute(
            select(Secret.value).where(Secret.key == key)
        )
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        """Store or replace a secret."""
        stmt = insert(Secret).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Secret.key],
            set_={"value": value}
        )
        await self.db.execute(stmt)
        await self.db.commit()

