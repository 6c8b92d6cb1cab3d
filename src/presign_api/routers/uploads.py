from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from presign_api.config.settings import Settings
from presign_api.dependencies import get_app_settings, get_signer
from presign_api.s3.presign import UrlSigner, presign_upload
from presign_api.schemas import PresignedURLResponse

router = APIRouter()


@router.get(
    "/generate-presigned-url",
    response_model=PresignedURLResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "description": "fileName is missing or empty",
            "content": {"text/plain": {"example": "fileName is required"}},
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "description": "The storage client could not sign the request",
            "content": {"text/plain": {}},
        },
    },
)
def generate_presigned_url(
    file_names: Optional[List[str]] = Query(
        None,
        alias="fileName",
        description="Name of the file to upload; stored under `uploads/`. Only the first value is used.",
    ),
    settings: Settings = Depends(get_app_settings),
    signer: UrlSigner = Depends(get_signer),
) -> Response:
    """
    Generate a presigned URL for uploading a file directly to S3.

    The URL authorizes a single PUT and stays valid for 15 minutes.
    """
    file_name = file_names[0] if file_names else None
    if not file_name:
        return PlainTextResponse("fileName is required", status_code=status.HTTP_400_BAD_REQUEST)

    url = presign_upload(signer, settings.s3_bucket_name, file_name)
    return JSONResponse(content=PresignedURLResponse(url=url).model_dump())
