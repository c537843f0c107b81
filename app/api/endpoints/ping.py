from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

PING_RESPONSE = "hi murmur"


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    """
    Liveness check; requests here are counted per client IP
    """
    return PING_RESPONSE
