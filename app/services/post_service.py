"""
Post service — business logic for the Post aggregate.

Design notes
------------
- Every read returns the post together with its author (``author_id``)
  and its single tag (``tags_id``).  Both are pulled in the same SELECT
  through ``joinedload`` so listing N posts costs one statement, not
  2N + 1.
- Reads and writes are scoped to the owning user from the URL: a post id
  under the wrong user behaves exactly like a missing post.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency.
"""
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.errors import InvalidReferenceError, NotFoundError
from app.models import Post, Tag, utcnow
from app.schemas import PostCreate, PostUpdate
from app.services.user_service import user_to_dict


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def post_summary_to_dict(post: Post | None) -> dict | None:
    """
    Serialise a Post without its related rows, for embedding inside tag
    and comment responses.
    """
    if post is None:
        return None
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "author_id": post.author_id,
        "tags_id": post.tags_id,
        "created_at": post.created_at.isoformat() if post.created_at else None,
        "updated_at": post.updated_at.isoformat() if post.updated_at else None,
    }


def _tag_summary_to_dict(tag: Tag | None) -> dict | None:
    if tag is None:
        return None
    return {
        "id": tag.id,
        "name": tag.name,
        "post_id": tag.post_id,
        "created_at": tag.created_at.isoformat() if tag.created_at else None,
        "updated_at": tag.updated_at.isoformat() if tag.updated_at else None,
    }


def _post_to_dict(post: Post) -> dict:
    data = post_summary_to_dict(post)
    data["author"] = user_to_dict(post.author)
    data["tag"] = _tag_summary_to_dict(post.tag)
    return data


def _enriched_post_query():
    return select(Post).options(joinedload(Post.author), joinedload(Post.tag))


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_post(db: AsyncSession, post_id: int, author_id: int) -> dict:
    """Return the post with its author and tag populated."""
    q = (
        _enriched_post_query()
        .where(Post.id == post_id, Post.author_id == author_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    post = result.unique().scalar_one_or_none()
    if post is None:
        raise NotFoundError("post does not exist")
    return _post_to_dict(post)


async def get_posts(db: AsyncSession, limit: int, offset: int = 0) -> list[dict]:
    """Return a window of posts in id order, each with author and tag."""
    q = (
        _enriched_post_query()
        .order_by(Post.id)
        .offset(offset)
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    return [_post_to_dict(p) for p in result.unique().scalars().all()]


async def create_post(db: AsyncSession, author_id: int, data: PostCreate) -> dict:
    """
    Insert a post owned by *author_id*.

    When ``tags_id`` is given it must name an existing tag; its name is
    echoed back in ``tags``.
    """
    tag = None
    if data.tags_id is not None:
        tag = await db.get(Tag, data.tags_id)
        if tag is None:
            raise InvalidReferenceError("tag does not exist")

    post = Post(
        title=data.title,
        content=data.content,
        author_id=author_id,
        tags_id=data.tags_id,
    )
    db.add(post)
    await db.flush()

    return {
        "createdId": post.id,
        "title": post.title,
        "content": post.content,
        "author_id": post.author_id,
        "tags_id": post.tags_id,
        "tags": [tag.name] if tag is not None else [],
        "created_at": post.created_at.isoformat(),
        "updated_at": post.updated_at.isoformat(),
    }


async def update_post(
    db: AsyncSession, post_id: int, author_id: int, data: PostUpdate
) -> dict:
    """
    Apply the non-empty fields of *data* and return the re-read post with
    its author and tag.
    """
    values = {"updated_at": utcnow()}
    if data.title:
        values["title"] = data.title
    if data.content:
        values["content"] = data.content

    await db.execute(
        update(Post)
        .where(Post.id == post_id, Post.author_id == author_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return await get_post(db, post_id, author_id)


async def delete_post(db: AsyncSession, post_id: int, author_id: int) -> None:
    """Delete the post; tags and comments pointing at it are left in place."""
    await db.execute(delete(Post).where(Post.id == post_id, Post.author_id == author_id))
