from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import PathId
from app.responses import envelope
from app.schemas import TagCreate, TagUpdate
from app.services import tag_service

router = APIRouter(prefix="/api/post/{post_id}", tags=["tags"])

@router.get("/tags/{tag_id}")
async def get_tag(post_id: PathId, tag_id: PathId, db: AsyncSession = Depends(get_db)):
    return envelope(await tag_service.get_tag(db, tag_id, post_id))

@router.post("/create-tag", status_code=201)
async def create_tag(post_id: PathId, data: TagCreate, db: AsyncSession = Depends(get_db)):
    return envelope(await tag_service.create_tag(db, post_id, data), status_code=201)

@router.put("/tags/{tag_id}")
async def update_tag(
    post_id: PathId,
    tag_id: PathId,
    data: TagUpdate | None = None,
    db: AsyncSession = Depends(get_db),
):
    return envelope(await tag_service.update_tag(db, tag_id, post_id, data or TagUpdate()))

@router.delete("/tags/{tag_id}", status_code=204)
async def delete_tag(post_id: PathId, tag_id: PathId, db: AsyncSession = Depends(get_db)):
    await tag_service.delete_tag(db, tag_id, post_id)
    return Response(status_code=204)
