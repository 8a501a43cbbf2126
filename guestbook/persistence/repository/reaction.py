"""PostgreSQL implementation of Reaction repository."""

from typing import List, Sequence

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.domain.model import Reaction
from guestbook.domain.repository import ReactionRepository
from guestbook.domain.value import EntryId
from guestbook.persistence.mappers import reaction_to_dict, row_to_reaction
from guestbook.persistence.tables import reactions_table


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(self, reaction: Reaction) -> Reaction:
        """Insert or replace a reaction in one statement."""
        stmt = insert(reactions_table).values(**reaction_to_dict(reaction))
        stmt = stmt.on_conflict_do_update(
            index_elements=[reactions_table.c.entry_id, reactions_table.c.identity_key],
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(reactions_table)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_reaction(result.one()._asdict())

    async def delete(self, entry_id: EntryId, identity_key: str) -> bool:
        """Delete the reaction for a key."""
        stmt = delete(reactions_table).where(
            and_(
                reactions_table.c.entry_id == entry_id,
                reactions_table.c.identity_key == identity_key,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_by_entries(self, entry_ids: Sequence[EntryId]) -> List[Reaction]:
        """Find all reactions on the given entries."""
        if not entry_ids:
            return []
        stmt = select(reactions_table).where(
            reactions_table.c.entry_id.in_(list(entry_ids))
        )
        result = await self.session.execute(stmt)
        return [row_to_reaction(row._asdict()) for row in result.fetchall()]
