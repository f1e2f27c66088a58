"""
Mapping of the ``aws_s3_bucket_website_configuration`` configuration blocks to the S3 ``WebsiteConfiguration``.

Configuration document::

    error_document = [{"key": "error.html"}]
    index_document = [{"suffix": "index.html"}]
    redirect_all_requests_to = [{"host_name": "example.com", "protocol": "https"}]
    routing_rule = [
        {
            "condition": [{"key_prefix_equals": "docs/"}],
            "redirect": [{"replace_key_prefix_with": "documents/"}],
        }
    ]

``redirect_all_requests_to`` excludes all other blocks on the S3 side, which is not validated here.
"""
import logging
from typing import Any, Mapping

from resourcekit.aws.api.s3 import GetBucketWebsiteOutput, WebsiteConfiguration
from resourcekit.exceptions import MalformedDocumentError
from resourcekit.mapping import BlockSchema, NestedBlock, NestedBlockList, String, flatten

LOG = logging.getLogger(__name__)

ERROR_DOCUMENT = BlockSchema({"key": String("Key")})

INDEX_DOCUMENT = BlockSchema({"suffix": String("Suffix")})

REDIRECT_ALL_REQUESTS_TO = BlockSchema(
    {
        "host_name": String("HostName"),
        "protocol": String("Protocol"),
    }
)

CONDITION = BlockSchema(
    {
        "http_error_code_returned_equals": String("HttpErrorCodeReturnedEquals"),
        "key_prefix_equals": String("KeyPrefixEquals"),
    }
)

REDIRECT = BlockSchema(
    {
        "host_name": String("HostName"),
        "http_redirect_code": String("HttpRedirectCode"),
        "protocol": String("Protocol"),
        "replace_key_prefix_with": String("ReplaceKeyPrefixWith"),
        "replace_key_with": String("ReplaceKeyWith"),
    }
)

ROUTING_RULE = BlockSchema(
    {
        "condition": NestedBlock("Condition", CONDITION),
        "redirect": NestedBlock("Redirect", REDIRECT),
    }
)

WEBSITE_CONFIGURATION = BlockSchema(
    {
        "error_document": NestedBlock("ErrorDocument", ERROR_DOCUMENT),
        "index_document": NestedBlock("IndexDocument", INDEX_DOCUMENT),
        "redirect_all_requests_to": NestedBlock("RedirectAllRequestsTo", REDIRECT_ALL_REQUESTS_TO),
        "routing_rule": NestedBlockList("RoutingRules", ROUTING_RULE),
    }
)


def expand_website_configuration(data: Any, strict: bool = False) -> WebsiteConfiguration:
    """
    Builds the ``WebsiteConfiguration`` of a ``put_bucket_website`` request from the website blocks of the given
    configuration document (a ``ResourceData`` or a plain mapping). Blocks which are not configured are omitted.

    :param data: the configuration document
    :param strict: raise a ``MalformedDocumentError`` for malformed routing rules instead of skipping them
    """
    raw = {key: data.get(key) for key in WEBSITE_CONFIGURATION.keys()}
    element = WEBSITE_CONFIGURATION.load_element(raw, strict=strict)
    return WebsiteConfiguration(**WEBSITE_CONFIGURATION.expand_element(element))


def flatten_website_configuration(output: GetBucketWebsiteOutput, data: Any) -> None:
    """
    Writes the website blocks of a ``get_bucket_website`` response into the given configuration document. Blocks
    which are not set in the response are written as empty lists.
    """
    for key, value in website_configuration_document(output).items():
        try:
            data.set(key, value)
        except KeyError as e:
            raise MalformedDocumentError("", f"error setting {key}: {e}") from e


def website_configuration_document(output: GetBucketWebsiteOutput) -> Mapping[str, Any]:
    """Returns the website blocks of a ``get_bucket_website`` response as a raw configuration mapping."""
    return {
        key: flatten(field, output.get(field.api_name))
        for key, field in WEBSITE_CONFIGURATION.fields.items()
    }
