from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from listening_quiz.core.time import utc_now
from listening_quiz.db import get_session
from listening_quiz.models import StorageEntry


class DatabaseStorage:
    """Key/value access to the storage_entries table."""

    def __init__(self, bind: Optional[AsyncEngine] = None):
        self.bind = bind

    async def read(self, key: str) -> Optional[str]:
        async with get_session(self.bind) as db:
            entry = await db.get(StorageEntry, key)
            return entry.value if entry else None

    async def write(self, key: str, value: str) -> None:
        async with get_session(self.bind) as db:
            entry = await db.get(StorageEntry, key)
            if entry:
                entry.value = value
                entry.updated_at = utc_now()
            else:
                db.add(StorageEntry(key=key, value=value))
            await db.commit()
