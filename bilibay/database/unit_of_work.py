"""
Unit of Work

Owns the transaction boundary of a use case. Repositories only add and
flush; the use case decides when the whole change set is committed or
thrown away.
"""

import logging
from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@runtime_checkable
class IUnitOfWork(Protocol):
    """Transaction boundary used by application use cases."""

    async def commit(self) -> None:
        """Persist every pending change"""
        ...

    async def rollback(self) -> None:
        """Discard every pending change"""
        ...


class SQLAlchemyUnitOfWork(IUnitOfWork):
    """Unit of work bound to one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        logger.debug("Rolling back unit of work")
        await self.session.rollback()
