from tests.fixtures.app_fixtures import (  # noqa: F401
    app_env,
    app_settings,
    client,
    fake_client,
    isolated_env,
    recording_signer,
)
from tests.fixtures.aws_fixtures import mocked_aws  # noqa: F401
