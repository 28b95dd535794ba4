from typing import Annotated

from fastapi import HTTPException, Path, Query

from app.config import settings

# Row ids in the URL; zero and negatives are rejected at binding time.
PathId = Annotated[int, Path(gt=0)]


class WindowParams:
    """
    Reusable FastAPI dependency that turns the ``from``/``to`` query
    parameters into an SQL ``offset`` and ``limit``.

    Usage in a router::

        @router.get("/users")
        async def list_users(window: WindowParams = Depends()):
            ...

    Attributes
    ----------
    offset:
        First row of the window (the ``from`` parameter).
    limit:
        Width of the window, ``to - from``.  ``to`` defaults to
        ``settings.DEFAULT_WINDOW_END`` when omitted or zero, and the
        width is clamped to ``settings.MAX_WINDOW``.

    A window whose width is zero or negative is rejected with 400.
    """

    def __init__(
        self,
        from_: int = Query(
            0,
            alias="from",
            ge=0,
            description="Offset of the first row returned.",
        ),
        to: int = Query(
            0,
            ge=0,
            description="Exclusive end of the window (0 means the default of 100).",
        ),
    ) -> None:
        if to == 0:
            to = settings.DEFAULT_WINDOW_END

        limit = to - from_
        if limit <= 0:
            raise HTTPException(status_code=400, detail="'to' is less than 'from'")

        self.offset = from_
        self.limit = min(limit, settings.MAX_WINDOW)
