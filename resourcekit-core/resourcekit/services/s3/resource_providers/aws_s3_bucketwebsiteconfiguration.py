import logging
from typing import Optional

from botocore.exceptions import ClientError

from resourcekit import config
from resourcekit.aws.api.s3 import ErrorCode, PutBucketWebsiteRequest
from resourcekit.aws.errors import error_code_equals, retry_on_aws_code
from resourcekit.config import WaiterTimeouts
from resourcekit.exceptions import ResourceOperationError
from resourcekit.identity import IdentityFormat
from resourcekit.resource_provider import (
    OperationStatus,
    ProgressEvent,
    ResourceData,
    ResourceProvider,
    ResourceRequest,
    register_resource_provider,
)
from resourcekit.services.s3.website import (
    WEBSITE_CONFIGURATION,
    expand_website_configuration,
    flatten_website_configuration,
)
from resourcekit.utils.backoff import ExponentialBackoff

LOG = logging.getLogger(__name__)

BUCKET_WEBSITE_CONFIGURATION_ID = IdentityFormat(first="BUCKET", second="EXPECTED_BUCKET_OWNER")

NOT_FOUND_ERROR_CODES = (ErrorCode.NoSuchBucket, ErrorCode.NoSuchWebsiteConfiguration)


@register_resource_provider
class S3BucketWebsiteConfigurationProvider(ResourceProvider[ResourceData]):
    TYPE = "aws_s3_bucket_website_configuration"
    PROPERTIES = ("bucket", "expected_bucket_owner", *WEBSITE_CONFIGURATION.keys())

    def __init__(
        self,
        timeouts: Optional[WaiterTimeouts] = None,
        backoff: Optional[ExponentialBackoff] = None,
    ):
        self.timeouts = timeouts
        self.backoff = backoff

    def create(self, request: ResourceRequest[ResourceData]) -> ProgressEvent[ResourceData]:
        """
        Puts the website configuration of the bucket. A bucket which has just been created might not be visible
        yet, so NoSuchBucket errors are retried for the propagation timeout.
        """
        data = request.desired_state
        s3 = request.aws_client_factory.s3

        bucket = data.get("bucket")
        expected_bucket_owner = data.get("expected_bucket_owner") or ""
        put_request = self._put_bucket_website_request(data, bucket, expected_bucket_owner)

        timeouts = self.timeouts or config.WAITER_TIMEOUTS
        try:
            retry_on_aws_code(
                [ErrorCode.NoSuchBucket],
                lambda: s3.put_bucket_website(**put_request),
                timeout=timeouts.propagation,
                backoff=self.backoff,
            )
        except ClientError as e:
            raise ResourceOperationError(
                "create",
                bucket,
                f"error creating S3 bucket ({bucket}) website configuration: {e}",
            ) from e

        data.set_id(BUCKET_WEBSITE_CONFIGURATION_ID.format(bucket, expected_bucket_owner))

        return self.read(request)

    def read(self, request: ResourceRequest[ResourceData]) -> ProgressEvent[ResourceData]:
        data = request.desired_state
        s3 = request.aws_client_factory.s3

        bucket, expected_bucket_owner = BUCKET_WEBSITE_CONFIGURATION_ID.parse(data.id)

        get_request = {"Bucket": bucket}
        if expected_bucket_owner:
            get_request["ExpectedBucketOwner"] = expected_bucket_owner

        try:
            output = s3.get_bucket_website(**get_request)
        except ClientError as e:
            if not data.is_new_resource and error_code_equals(e, *NOT_FOUND_ERROR_CODES):
                LOG.warning(
                    "S3 Bucket Website Configuration (%s) not found, removing from state", data.id
                )
                data.set_id("")
                return ProgressEvent(status=OperationStatus.SUCCESS, resource_model=data)
            raise ResourceOperationError(
                "read",
                data.id,
                f"error reading S3 bucket website configuration ({data.id}): {e}",
            ) from e

        data.set("bucket", bucket)
        data.set("expected_bucket_owner", expected_bucket_owner)
        flatten_website_configuration(output, data)

        return ProgressEvent(status=OperationStatus.SUCCESS, resource_model=data)

    def update(self, request: ResourceRequest[ResourceData]) -> ProgressEvent[ResourceData]:
        data = request.desired_state
        s3 = request.aws_client_factory.s3

        bucket, expected_bucket_owner = BUCKET_WEBSITE_CONFIGURATION_ID.parse(data.id)
        put_request = self._put_bucket_website_request(data, bucket, expected_bucket_owner)

        try:
            s3.put_bucket_website(**put_request)
        except ClientError as e:
            raise ResourceOperationError(
                "update",
                data.id,
                f"error updating S3 bucket website configuration ({data.id}): {e}",
            ) from e

        return self.read(request)

    def delete(self, request: ResourceRequest[ResourceData]) -> ProgressEvent[ResourceData]:
        data = request.desired_state
        s3 = request.aws_client_factory.s3

        bucket, expected_bucket_owner = BUCKET_WEBSITE_CONFIGURATION_ID.parse(data.id)

        delete_request = {"Bucket": bucket}
        if expected_bucket_owner:
            delete_request["ExpectedBucketOwner"] = expected_bucket_owner

        try:
            s3.delete_bucket_website(**delete_request)
        except ClientError as e:
            if not error_code_equals(e, *NOT_FOUND_ERROR_CODES):
                raise ResourceOperationError(
                    "delete",
                    data.id,
                    f"error deleting S3 bucket website configuration ({data.id}): {e}",
                ) from e
            LOG.debug("S3 Bucket Website Configuration (%s) already gone", data.id)

        return ProgressEvent(status=OperationStatus.SUCCESS, resource_model=data)

    @staticmethod
    def _put_bucket_website_request(
        data: ResourceData, bucket: str, expected_bucket_owner: str
    ) -> PutBucketWebsiteRequest:
        put_request = PutBucketWebsiteRequest(
            Bucket=bucket,
            WebsiteConfiguration=expand_website_configuration(data),
        )
        if expected_bucket_owner:
            put_request["ExpectedBucketOwner"] = expected_bucket_owner
        return put_request
