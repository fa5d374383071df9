from typing import AsyncIterator

from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .config import Settings
from .domain.errors import Unauthorized
from .infrastructure.mailer import Mailer
from .infrastructure.slot_locks import SlotLocks
from .usecases.admin import authorize_admin


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with session_factory() as session:
        yield session


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_slot_locks(request: Request) -> SlotLocks:
    return request.app.state.slot_locks


async def require_admin_key(
    key: str | None = Query(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    try:
        authorize_admin(key, settings.admin_key)
    except Unauthorized as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from exc
