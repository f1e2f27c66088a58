import pytest

from resourcekit.exceptions import MalformedDocumentError
from resourcekit.resource_provider import ResourceData
from resourcekit.services.s3.website import (
    WEBSITE_CONFIGURATION,
    expand_website_configuration,
    flatten_website_configuration,
    website_configuration_document,
)

KEYS = ("bucket", "expected_bucket_owner", *WEBSITE_CONFIGURATION.keys())


def test_expand_website_configuration():
    document = {
        "error_document": [{"key": "error.html"}],
        "index_document": [{"suffix": "index.html"}],
        "routing_rule": [
            {
                "condition": [{"key_prefix_equals": "docs/"}],
                "redirect": [{"replace_key_prefix_with": "documents/"}],
            },
            {
                "condition": [{"http_error_code_returned_equals": "404"}],
                "redirect": [
                    {
                        "host_name": "example.com",
                        "http_redirect_code": "301",
                        "protocol": "https",
                        "replace_key_with": "not-found.html",
                    }
                ],
            },
        ],
    }

    assert expand_website_configuration(document) == {
        "ErrorDocument": {"Key": "error.html"},
        "IndexDocument": {"Suffix": "index.html"},
        "RoutingRules": [
            {
                "Condition": {"KeyPrefixEquals": "docs/"},
                "Redirect": {"ReplaceKeyPrefixWith": "documents/"},
            },
            {
                "Condition": {"HttpErrorCodeReturnedEquals": "404"},
                "Redirect": {
                    "HostName": "example.com",
                    "HttpRedirectCode": "301",
                    "Protocol": "https",
                    "ReplaceKeyWith": "not-found.html",
                },
            },
        ],
    }


def test_expand_redirect_all_requests_to():
    data = ResourceData(
        KEYS,
        {
            "bucket": "my-bucket",
            "redirect_all_requests_to": [{"host_name": "example.com", "protocol": ""}],
        },
    )

    assert expand_website_configuration(data) == {
        "RedirectAllRequestsTo": {"HostName": "example.com"}
    }


def test_expand_omits_blocks_which_are_not_configured():
    document = {
        "error_document": [],
        "index_document": [None],
        "redirect_all_requests_to": None,
        "routing_rule": [],
    }

    assert expand_website_configuration(document) == {}


def test_expand_keeps_configured_empty_blocks():
    assert expand_website_configuration({"index_document": [{"suffix": ""}]}) == {
        "IndexDocument": {}
    }


def test_expand_skips_malformed_routing_rules():
    document = {"routing_rule": ["not-a-rule", {"redirect": [{"host_name": "example.com"}]}]}

    assert expand_website_configuration(document) == {
        "RoutingRules": [{"Redirect": {"HostName": "example.com"}}]
    }

    with pytest.raises(MalformedDocumentError, match="routing_rule.0"):
        expand_website_configuration(document, strict=True)


def test_flatten_website_configuration():
    output = {
        "IndexDocument": {"Suffix": "index.html"},
        "RoutingRules": [
            {
                "Condition": {"KeyPrefixEquals": "docs/"},
                "Redirect": {"ReplaceKeyPrefixWith": "documents/"},
            }
        ],
        "ResponseMetadata": {"HTTPStatusCode": 200},
    }
    data = ResourceData(KEYS)

    flatten_website_configuration(output, data)

    assert data.to_dict() == {
        "error_document": [],
        "index_document": [{"suffix": "index.html"}],
        "redirect_all_requests_to": [],
        "routing_rule": [
            {
                "condition": [{"key_prefix_equals": "docs/"}],
                "redirect": [{"replace_key_prefix_with": "documents/"}],
            }
        ],
    }


def test_flatten_into_document_without_website_keys():
    data = ResourceData(["bucket"])

    with pytest.raises(MalformedDocumentError, match="error setting error_document"):
        flatten_website_configuration({}, data)


def test_round_trip():
    document = {
        "error_document": [{"key": "error.html"}],
        "index_document": [{"suffix": "index.html"}],
        "redirect_all_requests_to": [],
        "routing_rule": [
            {"redirect": [{"host_name": "example.com", "protocol": "https"}]},
            {"condition": [{"key_prefix_equals": "img/"}], "redirect": [{"replace_key_with": "x"}]},
        ],
    }

    assert website_configuration_document(expand_website_configuration(document)) == document
