"""Request dependencies that hand out the objects built at startup."""

from fastapi import Request

from presign_api.config.settings import Settings
from presign_api.s3.presign import UrlSigner


def get_app_settings(request: Request) -> Settings:
    """Settings dependency."""
    return request.app.state.settings


def get_signer(request: Request) -> UrlSigner:
    """Signer dependency."""
    return request.app.state.signer
