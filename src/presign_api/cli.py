# cli.py
import logging
import sys
from typing import Optional

import click
import uvicorn

from presign_api.config.settings import Settings, get_settings_with_env_file
from presign_api.errors import ConfigurationError, SigningError
from presign_api.main import create_app
from presign_api.s3.presign import build_object_key, build_signer, presign_upload

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

env_file_option = click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Extra .env file to load before reading settings",
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_settings_or_exit(env_file: Optional[str]) -> Settings:
    """Load settings, terminating the process if they are invalid."""
    try:
        return get_settings_with_env_file(env_file)
    except (ConfigurationError, FileNotFoundError) as e:
        configure_logging()
        logger.critical(str(e))
        sys.exit(1)


@click.group()
def cli():
    """CLI commands for the Presign API"""
    pass


@cli.command()
@env_file_option
def serve(env_file):
    """Validate configuration and start the HTTP server"""
    settings = load_settings_or_exit(env_file)
    configure_logging(settings.log_level)

    # Client construction must succeed before the port is bound
    try:
        signer = build_signer(settings)
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)

    app = create_app(settings=settings, signer=signer)
    logger.info(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.idle_timeout_seconds,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@env_file_option
def show_config(env_file):
    """Show current configuration"""
    settings = load_settings_or_exit(env_file)

    print("Current Configuration:")
    print(f"  S3 Bucket: {settings.s3_bucket_name}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  Listen Address: {settings.host}:{settings.port}")
    print(f"  Idle Timeout: {settings.idle_timeout_seconds}s")
    print(f"  Log Level: {settings.log_level}")


@cli.command()
@click.argument("file_name")
@env_file_option
def presign(file_name, env_file):
    """Print a presigned upload URL for FILE_NAME without starting the server"""
    settings = load_settings_or_exit(env_file)
    configure_logging(settings.log_level)

    try:
        signer = build_signer(settings)
        url = presign_upload(signer, settings.s3_bucket_name, file_name)
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)
    except SigningError as e:
        raise click.ClickException(f"Could not presign {build_object_key(file_name)}: {e}")

    click.echo(url)


if __name__ == "__main__":
    cli()
