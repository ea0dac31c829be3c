"""Row lookups shared by the managers."""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ringside.errors import NotFound
from ringside.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)

ENTITY_NAMES = {
    "wrestlers": "Wrestler",
    "shows": "Show",
    "titles": "Title",
    "matches": "Match",
    "signature_moves": "Signature move",
}


async def fetch_required(db: AsyncSession, model: type[ModelT], entity_id: int) -> ModelT:
    """Load a row by primary key or raise NotFound."""
    row = await db.get(model, entity_id)
    if row is None:
        entity = ENTITY_NAMES.get(model.__tablename__, model.__name__)
        raise NotFound.for_entity(entity, entity_id)
    return row
