"""
Comment service — CRUD for comments on a post.

Comments hold a direct ``post_id``; every operation is scoped to the post
from the URL, so a comment id under the wrong post is treated as missing
(reads, updates) or left alone (deletes).
"""
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.errors import NotFoundError
from app.models import Comment, utcnow
from app.schemas import CommentCreate, CommentUpdate
from app.services.post_service import post_summary_to_dict


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "name": comment.name,
        "body": comment.body,
        "post_id": comment.post_id,
        "post": post_summary_to_dict(comment.post),
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
        "updated_at": comment.updated_at.isoformat() if comment.updated_at else None,
    }


async def get_comment(db: AsyncSession, comment_id: int, post_id: int) -> dict:
    """Return the comment with its parent post embedded."""
    q = (
        select(Comment)
        .where(Comment.id == comment_id, Comment.post_id == post_id)
        .options(joinedload(Comment.post))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    comment = result.unique().scalar_one_or_none()
    if comment is None:
        raise NotFoundError("comment does not exist")
    return _comment_to_dict(comment)


async def add_comment(db: AsyncSession, post_id: int, data: CommentCreate) -> dict:
    """
    Append a comment to *post_id*.

    The post is not looked up first; like every other parent reference in
    this schema the link is not enforced.
    """
    comment = Comment(name=data.name, body=data.body, post_id=post_id)
    db.add(comment)
    await db.flush()
    return {
        "createdId": comment.id,
        "name": comment.name,
        "body": comment.body,
        "post_id": comment.post_id,
    }


async def update_comment(
    db: AsyncSession, comment_id: int, post_id: int, data: CommentUpdate
) -> dict:
    values = {"updated_at": utcnow()}
    if data.name:
        values["name"] = data.name
    if data.body:
        values["body"] = data.body

    await db.execute(
        update(Comment)
        .where(Comment.id == comment_id, Comment.post_id == post_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return await get_comment(db, comment_id, post_id)


async def delete_comment(db: AsyncSession, comment_id: int, post_id: int) -> None:
    await db.execute(
        delete(Comment).where(Comment.id == comment_id, Comment.post_id == post_id)
    )
