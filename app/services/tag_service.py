"""
Tag service — CRUD for tags attached to a post.

Every operation is scoped to the parent post from the URL.  Reads return
the tag with that post embedded.
"""
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.errors import NotFoundError
from app.models import Tag, utcnow
from app.schemas import TagCreate, TagUpdate
from app.services.post_service import post_summary_to_dict


def _tag_to_dict(tag: Tag) -> dict:
    return {
        "id": tag.id,
        "name": tag.name,
        "post_id": tag.post_id,
        "post": post_summary_to_dict(tag.post),
        "created_at": tag.created_at.isoformat() if tag.created_at else None,
        "updated_at": tag.updated_at.isoformat() if tag.updated_at else None,
    }


async def get_tag(db: AsyncSession, tag_id: int, post_id: int) -> dict:
    q = (
        select(Tag)
        .where(Tag.id == tag_id, Tag.post_id == post_id)
        .options(joinedload(Tag.post))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    tag = result.unique().scalar_one_or_none()
    if tag is None:
        raise NotFoundError("tag does not exist")
    return _tag_to_dict(tag)


async def create_tag(db: AsyncSession, post_id: int, data: TagCreate) -> dict:
    tag = Tag(name=data.name, post_id=post_id)
    db.add(tag)
    await db.flush()
    return {"createdId": tag.id, "name": tag.name, "post_id": tag.post_id}


async def update_tag(db: AsyncSession, tag_id: int, post_id: int, data: TagUpdate) -> dict:
    values = {"updated_at": utcnow()}
    if data.name:
        values["name"] = data.name

    await db.execute(
        update(Tag)
        .where(Tag.id == tag_id, Tag.post_id == post_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return await get_tag(db, tag_id, post_id)


async def delete_tag(db: AsyncSession, tag_id: int, post_id: int) -> None:
    await db.execute(delete(Tag).where(Tag.id == tag_id, Tag.post_id == post_id))
