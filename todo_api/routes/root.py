"""Todo API - Root Route"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Root"])


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def root() -> str:
    return "Hello, World!"
