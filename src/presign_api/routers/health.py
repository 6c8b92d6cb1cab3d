from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
def health_check() -> str:
    """
    Liveness probe.

    Always answers once the process is up; storage is not checked.
    """
    return "OK"
