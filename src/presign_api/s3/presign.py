"""Functions for presigning S3 upload requests."""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from presign_api.errors import ConfigurationError, SigningError

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

    from presign_api.config.settings import Settings

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads/"
PRESIGNED_URL_EXPIRATION = timedelta(minutes=15)


class UrlSigner(Protocol):
    """Anything that can presign a single PUT upload to a bucket/key pair."""

    def sign(self, bucket_name: str, object_key: str, ttl: timedelta) -> str:
        ...


def build_object_key(file_name: str) -> str:
    """
    Build the object key an upload is stored under.

    The file name is used verbatim, path separators included.
    """
    return f"{UPLOAD_PREFIX}{file_name}"


class S3UrlSigner:
    """Presigns ``put_object`` requests with a long-lived boto3 S3 client."""

    def __init__(self, s3_client: "S3Client"):
        self.s3_client = s3_client

    def sign(self, bucket_name: str, object_key: str, ttl: timedelta) -> str:
        """
        Generate a presigned URL for uploading an object.

        Signing happens locally with the client's credentials; no request is made to S3.

        :param bucket_name: The name of the S3 bucket.
        :param object_key: path to the object in the S3 bucket.
        :param ttl: How long the URL stays valid.
        :raises SigningError: If botocore fails to build or sign the request.
        """
        try:
            return self.s3_client.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": bucket_name, "Key": object_key},
                ExpiresIn=int(ttl.total_seconds()),
            )
        except (BotoCoreError, ClientError) as e:
            raise SigningError(key=object_key, original_error=e) from e


def create_s3_client(region_name: str, endpoint_url: Optional[str] = None) -> "S3Client":
    """
    Create an S3 client bound to a region.

    SigV4 is forced so the URL carries an explicit ``X-Amz-Expires`` window.
    """
    return boto3.client(
        "s3",
        region_name=region_name,
        endpoint_url=endpoint_url,
        config=Config(signature_version="s3v4"),
    )


def build_signer(settings: "Settings") -> S3UrlSigner:
    """
    Build the signer shared by all requests for the lifetime of the process.

    :raises ConfigurationError: If the S3 client cannot be constructed.
    """
    try:
        s3_client = create_s3_client(settings.aws_region, settings.aws_endpoint_url)
    except (BotoCoreError, ValueError) as e:
        raise ConfigurationError(f"Failed to create S3 client: {e}") from e
    logger.info(f"S3 client ready for bucket '{settings.s3_bucket_name}' in {settings.aws_region}")
    return S3UrlSigner(s3_client)


def presign_upload(signer: UrlSigner, bucket_name: str, file_name: str) -> str:
    """Presign an upload of ``file_name`` under the uploads prefix."""
    return signer.sign(bucket_name, build_object_key(file_name), PRESIGNED_URL_EXPIRATION)
