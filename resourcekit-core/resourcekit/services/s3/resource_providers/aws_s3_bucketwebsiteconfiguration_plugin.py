from typing import Optional, Type

from resourcekit.resource_provider import ResourceProvider, ResourceProviderPlugin


class S3BucketWebsiteConfigurationProviderPlugin(ResourceProviderPlugin):
    name = "aws_s3_bucket_website_configuration"

    def __init__(self):
        self.factory: Optional[Type[ResourceProvider]] = None

    def load(self):
        from resourcekit.services.s3.resource_providers.aws_s3_bucketwebsiteconfiguration import (
            S3BucketWebsiteConfigurationProvider,
        )

        self.factory = S3BucketWebsiteConfigurationProvider
