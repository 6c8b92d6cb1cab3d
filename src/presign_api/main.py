import logging
from textwrap import dedent
from typing import Optional

from fastapi import FastAPI
from fastapi.routing import APIRoute

from presign_api.config.settings import Settings, load_settings
from presign_api.errors import (
    SigningError,
    handle_broad_exceptions,
    handle_signing_errors,
)
from presign_api.routers.health import router as health_router
from presign_api.routers.uploads import router as uploads_router
from presign_api.s3.presign import UrlSigner, build_signer

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, signer: Optional[UrlSigner] = None) -> FastAPI:
    """
    Create a FastAPI application.

    :param settings: Validated settings; loaded from the environment if omitted.
    :param signer: The signer shared by all requests; an S3 signer for
        ``settings`` is built if omitted.
    """
    settings = settings or load_settings()
    signer = signer or build_signer(settings)

    app = FastAPI(
        title="Presign API",
        summary="Issue time-limited upload URLs for S3",
        version="v1",
        description=dedent(
            """\
        Clients ask for a URL with `GET /generate-presigned-url?fileName=...` and then
        `PUT` the file body to it directly. URLs expire 15 minutes after they are issued.
        """
        ),
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.settings = settings
    app.state.signer = signer

    app.include_router(uploads_router, tags=["uploads"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=SigningError,
        handler=handle_signing_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    logger.info(f"Serving presigned uploads for bucket '{settings.s3_bucket_name}' in {settings.aws_region}")
    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"
