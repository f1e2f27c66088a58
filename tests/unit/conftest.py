import pytest
from boto3.session import Session
from botocore.stub import Stubber

from resourcekit.aws.connect import ClientFactory, ServiceLevelClientFactory
from resourcekit.config import WaiterTimeouts
from resourcekit.constants import (
    TEST_AWS_ACCESS_KEY_ID,
    TEST_AWS_REGION_NAME,
    TEST_AWS_SECRET_ACCESS_KEY,
)
from resourcekit.utils.backoff import ExponentialBackoff


@pytest.fixture(autouse=True)
def set_boto_test_credentials_and_region(monkeypatch):
    """
    Automatically sets the default credentials and region for all unit tests.
    """
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", TEST_AWS_ACCESS_KEY_ID)
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", TEST_AWS_SECRET_ACCESS_KEY)
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_AWS_REGION_NAME)


@pytest.fixture
def aws_client_factory() -> ServiceLevelClientFactory:
    """Every test gets its own client factory, stubbed clients are not shared between tests."""
    factory = ClientFactory(session=Session())
    return factory(
        region_name=TEST_AWS_REGION_NAME,
        aws_access_key_id=TEST_AWS_ACCESS_KEY_ID,
        aws_secret_access_key=TEST_AWS_SECRET_ACCESS_KEY,
    )


@pytest.fixture
def s3_stubber(aws_client_factory):
    with Stubber(aws_client_factory.s3) as stubber:
        yield stubber


@pytest.fixture
def glue_client(aws_client_factory):
    return aws_client_factory.glue


@pytest.fixture
def glue_stubber(glue_client):
    with Stubber(glue_client) as stubber:
        yield stubber


@pytest.fixture
def fast_backoff() -> ExponentialBackoff:
    return ExponentialBackoff(initial_interval=0.001, max_interval=0.01, randomization_factor=0)


@pytest.fixture
def short_timeouts() -> WaiterTimeouts:
    return WaiterTimeouts(
        propagation=1,
        ml_transform_delete=1,
        registry_delete=1,
        schema_available=1,
        schema_delete=1,
        schema_version_available=1,
        trigger_create=1,
        trigger_delete=1,
        dev_endpoint_create=1,
        dev_endpoint_delete=1,
    )
