from typing import Optional, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from playbook.db.models import Tag


class TagRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, tag: Tag) -> Tag:
        self.db.add(tag)
        await self.db.commit()
        await self.db.refresh(tag)
        return tag

    async def update(self, tag: Tag) -> Tag:
        self.db.add(tag)
        await self.db.commit()
        return tag

    async def delete(self, tag: Tag) -> None:
        await self.db.delete(tag)
        await self.db.commit()

    async def get_by_id(self, tag_id: str) -> Optional[Tag]:
        result = await self.db.execute(select(Tag).where(Tag.id == tag_id))
        return result.scalar_one_or_none()

    async def get_by_id_and_user_id(self, tag_id: str, user_id: str) -> Optional[Tag]:
        result = await self.db.execute(
            select(Tag).where(Tag.id == tag_id, Tag.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str) -> list[Tag]:
        result = await self.db.execute(
            select(Tag).where(Tag.user_id == user_id).order_by(Tag.name)
        )
        return list(result.scalars().all())

    async def get_list_by_tag_id_and_user_id_list(
        self, pairs: Sequence[tuple[str, str]]
    ) -> list[Tag]:
        """Tags matching any (tag_id, user_id) pair, in the order the pairs were given."""
        if not pairs:
            return []
        clauses = [and_(Tag.id == tag_id, Tag.user_id == user_id) for tag_id, user_id in pairs]
        result = await self.db.execute(select(Tag).where(or_(*clauses)))
        by_id = {t.id: t for t in result.scalars().all()}
        ordered = []
        for tag_id, _ in pairs:
            tag = by_id.pop(tag_id, None)
            if tag is not None:
                ordered.append(tag)
        return ordered
