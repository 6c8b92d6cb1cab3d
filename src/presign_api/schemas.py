####################################
# --- Request/response schemas --- #
####################################

from pydantic import BaseModel, ConfigDict, Field


class PresignedURLResponse(BaseModel):
    """Response model for `GET /generate-presigned-url`."""

    url: str = Field(
        min_length=1,
        description="Presigned URL authorizing a single PUT upload.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "https://my-bucket.s3.amazonaws.com/uploads/photo.png?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Expires=900",
            }
        }
    )
