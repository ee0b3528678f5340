"""
Settings Store

Keyed JSON documents in the settings table. The store knows nothing about
document shape; defaulting and merging live in the links service.
"""

import json
import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from visit_tracker.core.exceptions import DatabaseError
from visit_tracker.db.interface import DatabaseAdapter
from visit_tracker.db.models import SettingRecord

logger = logging.getLogger(__name__)


class SettingsStore:
    """
    get / upsert for keyed JSON documents.
    """

    def __init__(self, session: AsyncSession, adapter: DatabaseAdapter):
        """
        Args:
            session: Async database session
            adapter: Supplies the backend-specific upsert statement
        """
        self.session = session
        self.adapter = adapter

    async def get(self, key: str) -> Optional[Any]:
        """
        Return the decoded document stored under key, or None.
        """
        statement = select(SettingRecord.value_json).where(SettingRecord.key == key)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to read setting '{key}': {e}", original_error=e)

        value_json = result.scalar_one_or_none()
        if value_json is None:
            return None
        return json.loads(value_json)

    async def upsert(self, key: str, document: Any, updated_at: int) -> None:
        """
        Insert or fully replace the document stored under key.

        Last writer wins; there is no version check.

        Raises:
            DatabaseError: If the write or commit fails (transaction is rolled back)
        """
        statement = self.adapter.build_upsert(
            SettingRecord.__table__,
            {
                "key": key,
                "value_json": json.dumps(document, ensure_ascii=False),
                "updated_at": updated_at,
            },
            conflict_columns=("key",),
        )
        try:
            await self.session.execute(statement)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(f"Failed to write setting '{key}': {e}", original_error=e)

        logger.debug(f"Setting '{key}' written at {updated_at}")
