from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import PathId
from app.responses import envelope
from app.schemas import CommentCreate, CommentUpdate
from app.services import comment_service

router = APIRouter(prefix="/api/post/{post_id}", tags=["comments"])

@router.get("/comments/{comment_id}")
async def get_comment(post_id: PathId, comment_id: PathId, db: AsyncSession = Depends(get_db)):
    return envelope(await comment_service.get_comment(db, comment_id, post_id))

@router.post("/add-comment", status_code=201)
async def add_comment(post_id: PathId, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    return envelope(await comment_service.add_comment(db, post_id, data), status_code=201)

@router.put("/comments/{comment_id}")
async def update_comment(
    post_id: PathId,
    comment_id: PathId,
    data: CommentUpdate | None = None,
    db: AsyncSession = Depends(get_db),
):
    return envelope(
        await comment_service.update_comment(db, comment_id, post_id, data or CommentUpdate())
    )

@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(post_id: PathId, comment_id: PathId, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id, post_id)
    return Response(status_code=204)
