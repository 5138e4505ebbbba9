from collections import defaultdict
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from playbook.core.errors import StoreError
from playbook.db.models import PickupLine, Reaction, utcnow
from playbook.domain import Vote
from playbook.schemas import StatisticsResponse
from playbook.utils import success_ratio


class PickupLineRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, pickup_line: PickupLine) -> PickupLine:
        self.db.add(pickup_line)
        await self.db.commit()
        return pickup_line

    async def update(self, pickup_line: PickupLine) -> PickupLine:
        pickup_line.updated_at = utcnow()
        self.db.add(pickup_line)
        await self.db.commit()
        return pickup_line

    async def delete(self, pickup_line: PickupLine) -> None:
        await self.db.delete(pickup_line)
        await self.db.commit()

    async def get_by_id(self, pickup_line_id: str) -> Optional[PickupLine]:
        result = await self.db.execute(select(PickupLine).where(PickupLine.id == pickup_line_id))
        return result.scalar_one_or_none()

    async def get_by_id_and_user_id(self, pickup_line_id: str, user_id: str) -> Optional[PickupLine]:
        result = await self.db.execute(
            select(PickupLine).where(
                PickupLine.id == pickup_line_id,
                PickupLine.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_for_visibility_check(self, pickup_line_id: str) -> Optional[tuple[str, bool]]:
        """(owner id, visible) for a pickup line without loading its relationships."""
        result = await self.db.execute(
            select(PickupLine.user_id, PickupLine.visible).where(PickupLine.id == pickup_line_id)
        )
        row = result.first()
        return (row.user_id, row.visible) if row else None

    async def get_reaction(self, pickup_line_id: str, user_id: str) -> Optional[Reaction]:
        return await self.db.get(Reaction, (pickup_line_id, user_id))

    async def upsert_reaction(
        self, pickup_line_id: str, user_id: str, starred: bool, vote: Optional[Vote]
    ) -> Reaction:
        """Insert or overwrite the reaction in a single statement."""
        dialects = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}
        insert = dialects.get(self.db.bind.dialect.name)
        if insert is None:
            raise StoreError(f"Reaction upsert unsupported on {self.db.bind.dialect.name}")
        vote_value = (vote or Vote.NONE).value
        stmt = (
            insert(Reaction)
            .values(pickup_line_id=pickup_line_id, user_id=user_id, starred=starred, vote=vote_value)
            .on_conflict_do_update(
                index_elements=[Reaction.pickup_line_id, Reaction.user_id],
                set_={"starred": starred, "vote": vote_value},
            )
            .returning(Reaction)
        )
        result = await self.db.execute(stmt, execution_options={"populate_existing": True})
        reaction = result.scalar_one()
        await self.db.commit()
        return reaction

    async def get_statistics(self, pickup_line_id: str) -> StatisticsResponse:
        """Aggregate reaction rows of one pickup line into counters."""
        result = await self.db.execute(
            select(Reaction.vote, func.count())
            .where(Reaction.pickup_line_id == pickup_line_id)
            .group_by(Reaction.vote)
        )
        counts = {vote: total for vote, total in result.all()}
        successes = counts.get(Vote.UPVOTE.value, 0)
        failures = counts.get(Vote.DOWNVOTE.value, 0)
        tries = successes + failures
        return StatisticsResponse(
            number_of_successes=successes,
            number_of_failures=failures,
            number_of_tries=tries,
            success_percentage=success_ratio(successes, tries),
        )

    async def list_all(self) -> list[PickupLine]:
        result = await self.db.execute(select(PickupLine).order_by(PickupLine.created_at))
        return list(result.scalars().all())

    async def get_reactions_by_pickup_line(self, pickup_line_ids: list[str]) -> dict[str, list[Reaction]]:
        if not pickup_line_ids:
            return {}
        result = await self.db.execute(
            select(Reaction).where(Reaction.pickup_line_id.in_(pickup_line_ids))
        )
        grouped: dict[str, list[Reaction]] = defaultdict(list)
        for reaction in result.scalars().all():
            grouped[reaction.pickup_line_id].append(reaction)
        return grouped
