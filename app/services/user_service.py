"""
User service — CRUD operations for the User aggregate.

Users have no related rows loaded on read; a missing user raises
``NotFoundError`` which the HTTP layer reports as a server error.
"""
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models import User, utcnow
from app.schemas import UserCreate, UserUpdate


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def user_to_dict(user: User | None) -> dict | None:
    """Serialise a User ORM instance to a plain dict."""
    if user is None:
        return None
    return {
        "id": user.id,
        "name": user.name,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "updated_at": user.updated_at.isoformat() if user.updated_at else None,
    }


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_user(db: AsyncSession, user_id: int) -> dict:
    q = select(User).where(User.id == user_id).execution_options(populate_existing=True)
    result = await db.execute(q)
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("user does not exist")
    return user_to_dict(user)


async def get_users(db: AsyncSession, limit: int, offset: int = 0) -> list[dict]:
    """Return at most *limit* users starting at row *offset*, in id order."""
    q = select(User).order_by(User.id).offset(offset).limit(limit)
    result = await db.execute(q)
    return [user_to_dict(u) for u in result.scalars().all()]


async def create_user(db: AsyncSession, data: UserCreate) -> dict:
    """
    Insert a user and echo it back under ``createdId``.

    Name uniqueness is enforced by the database; the resulting
    ``IntegrityError`` propagates to the exception handlers.
    """
    user = User(name=data.name)
    db.add(user)
    await db.flush()
    return {
        "createdId": user.id,
        "name": user.name,
        "created_at": user.created_at.isoformat(),
        "updated_at": user.updated_at.isoformat(),
    }


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> dict:
    """
    Apply the non-empty fields of *data* to the user and return the
    re-read row.  ``updated_at`` is refreshed even when nothing else is.
    """
    values = {"updated_at": utcnow()}
    if data.name:
        values["name"] = data.name

    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return await get_user(db, user_id)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete the user; deleting an unknown id is not an error."""
    await db.execute(delete(User).where(User.id == user_id))
