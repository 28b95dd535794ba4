from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import PathId, WindowParams
from app.responses import envelope
from app.schemas import UserCreate, UserUpdate
from app.services import user_service

router = APIRouter(prefix="/api", tags=["users"])

@router.get("/user/{user_id}")
async def get_user(user_id: PathId, db: AsyncSession = Depends(get_db)):
    return envelope(await user_service.get_user(db, user_id))

@router.get("/users")
async def list_users(window: WindowParams = Depends(), db: AsyncSession = Depends(get_db)):
    return envelope(await user_service.get_users(db, window.limit, window.offset))

@router.post("/create-user", status_code=201)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    return envelope(await user_service.create_user(db, data), status_code=201)

@router.put("/user/{user_id}")
async def update_user(
    user_id: PathId, data: UserUpdate | None = None, db: AsyncSession = Depends(get_db)
):
    return envelope(await user_service.update_user(db, user_id, data or UserUpdate()))

@router.delete("/user/{user_id}", status_code=204)
async def delete_user(user_id: PathId, db: AsyncSession = Depends(get_db)):
    await user_service.delete_user(db, user_id)
    return Response(status_code=204)
