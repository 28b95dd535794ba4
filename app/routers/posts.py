from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import PathId, WindowParams
from app.responses import envelope
from app.schemas import PostCreate, PostUpdate
from app.services import post_service

router = APIRouter(prefix="/api", tags=["posts"])

@router.get("/user/{user_id}/post/{post_id}")
async def get_post(user_id: PathId, post_id: PathId, db: AsyncSession = Depends(get_db)):
    return envelope(await post_service.get_post(db, post_id, user_id))

@router.get("/posts")
async def list_posts(window: WindowParams = Depends(), db: AsyncSession = Depends(get_db)):
    return envelope(await post_service.get_posts(db, window.limit, window.offset))

@router.post("/user/{user_id}/create-post", status_code=201)
async def create_post(user_id: PathId, data: PostCreate, db: AsyncSession = Depends(get_db)):
    return envelope(await post_service.create_post(db, user_id, data), status_code=201)

@router.put("/user/{user_id}/post/{post_id}")
async def update_post(
    user_id: PathId,
    post_id: PathId,
    data: PostUpdate | None = None,
    db: AsyncSession = Depends(get_db),
):
    return envelope(await post_service.update_post(db, post_id, user_id, data or PostUpdate()))

@router.delete("/user/{user_id}/post/{post_id}", status_code=204)
async def delete_post(user_id: PathId, post_id: PathId, db: AsyncSession = Depends(get_db)):
    await post_service.delete_post(db, post_id, user_id)
    return Response(status_code=204)
