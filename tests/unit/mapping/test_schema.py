import logging

import pytest

from resourcekit.exceptions import MalformedDocumentError
from resourcekit.mapping import (
    ABSENT,
    BlockSchema,
    NestedBlock,
    NestedBlockList,
    Repeated,
    Scalar,
    Singleton,
    String,
    expand,
    flatten,
)

REDIRECT = BlockSchema({"host_name": String("HostName"), "protocol": String("Protocol")})

RULE = BlockSchema(
    {
        "condition": NestedBlock("Condition", BlockSchema({"prefix": String("KeyPrefixEquals")})),
        "redirect": NestedBlock("Redirect", REDIRECT),
    }
)

redirect_field = NestedBlock("RedirectAllRequestsTo", REDIRECT)
rules_field = NestedBlockList("RoutingRules", RULE)


class TestString:
    def test_load(self):
        field = String("Key")
        assert field.load("a") == Scalar("a")
        assert field.load("") == Scalar("")
        assert field.load(None) is ABSENT

    def test_load_non_string(self):
        field = String("Key")
        assert field.load(42) is ABSENT

        with pytest.raises(MalformedDocumentError, match="key: expected a string, got int"):
            field.load(42, path="key", strict=True)

    def test_expand_omits_empty_strings(self):
        field = String("Key")
        assert field.expand(Scalar("a")) == "a"
        assert field.expand(Scalar("")) is None
        assert field.expand(ABSENT) is None

    def test_flatten(self):
        field = String("Key")
        assert field.flatten("a") == Scalar("a")
        assert field.flatten(None) is ABSENT
        assert field.dump(field.flatten(None)) is None


class TestNestedBlock:
    def test_expand(self):
        assert expand(redirect_field, [{"host_name": "example.com", "protocol": "https"}]) == {
            "HostName": "example.com",
            "Protocol": "https",
        }

    def test_expand_not_configured(self):
        assert expand(redirect_field, None) is None
        assert expand(redirect_field, []) is None
        assert expand(redirect_field, [None]) is None

    def test_expand_empty_values(self):
        # a configured block without values is still sent, as an empty structure
        assert expand(redirect_field, [{}]) == {}
        assert expand(redirect_field, [{"host_name": "", "protocol": ""}]) == {}

    def test_expand_skips_unset_strings(self):
        assert expand(redirect_field, [{"host_name": "example.com", "protocol": ""}]) == {
            "HostName": "example.com"
        }

    def test_non_mapping_element_is_not_configured(self):
        assert expand(redirect_field, ["example.com"]) is None

        with pytest.raises(MalformedDocumentError):
            expand(redirect_field, ["example.com"], path="redirect", strict=True)

    def test_more_than_one_element(self):
        with pytest.raises(MalformedDocumentError, match="expected at most one block, got 2"):
            expand(redirect_field, [{"host_name": "a"}, {"host_name": "b"}])

    def test_flatten(self):
        assert flatten(redirect_field, {"HostName": "example.com"}) == [
            {"host_name": "example.com"}
        ]
        assert flatten(redirect_field, {"HostName": "example.com", "Protocol": "http"}) == [
            {"host_name": "example.com", "protocol": "http"}
        ]

    def test_flatten_absent(self):
        assert flatten(redirect_field, None) == []

    def test_flatten_empty_structure(self):
        assert flatten(redirect_field, {}) == [{}]

    def test_load_dump(self):
        block = redirect_field.load([{"host_name": "example.com", "unknown": "x"}])
        assert block == Singleton({"host_name": Scalar("example.com")})
        assert redirect_field.dump(block) == [{"host_name": "example.com"}]
        assert redirect_field.dump(ABSENT) == []


class TestNestedBlockList:
    def test_expand_nested(self):
        raw = [
            {
                "condition": [{"prefix": "docs/"}],
                "redirect": [{"host_name": "example.com"}],
            },
            {
                "redirect": [{"protocol": "https"}],
            },
        ]

        assert expand(rules_field, raw) == [
            {"Condition": {"KeyPrefixEquals": "docs/"}, "Redirect": {"HostName": "example.com"}},
            {"Redirect": {"Protocol": "https"}},
        ]

    def test_expand_empty(self):
        assert expand(rules_field, None) is None
        assert expand(rules_field, []) is None

    def test_expand_skips_malformed_elements(self, caplog):
        raw = [None, "rule", {"redirect": [{"host_name": "example.com"}]}]

        with caplog.at_level(logging.DEBUG, logger="resourcekit.mapping.schema"):
            result = expand(rules_field, raw, path="routing_rule")

        assert result == [{"Redirect": {"HostName": "example.com"}}]
        assert "routing_rule.0" in caplog.text
        assert "routing_rule.1" in caplog.text

    def test_expand_strict(self):
        with pytest.raises(MalformedDocumentError) as e:
            expand(rules_field, [{"redirect": [{}]}, "rule"], path="routing_rule", strict=True)

        assert e.value.path == "routing_rule.1"

    def test_flatten(self):
        value = [
            {"Condition": {"KeyPrefixEquals": "docs/"}, "Redirect": {"HostName": "example.com"}},
            None,
            {"Redirect": {}},
        ]

        assert flatten(rules_field, value) == [
            {"condition": [{"prefix": "docs/"}], "redirect": [{"host_name": "example.com"}]},
            {"redirect": [{}]},
        ]

    def test_flatten_empty(self):
        assert flatten(rules_field, None) == []
        assert flatten(rules_field, []) == []
        assert flatten(rules_field, [None]) == []

    def test_load_returns_repeated(self):
        block = rules_field.load([{"redirect": [{"protocol": "http"}]}])
        assert isinstance(block, Repeated)
        assert len(block) == 1
        assert block.items[0].get("condition") is ABSENT


def test_round_trip():
    document = [
        {"condition": [{"prefix": "docs/"}], "redirect": [{"host_name": "example.com"}]},
        {"redirect": [{"protocol": "https"}]},
    ]
    assert flatten(rules_field, expand(rules_field, document)) == document


def test_round_trip_normalizes_empty_strings():
    document = [{"host_name": "example.com", "protocol": ""}]
    assert flatten(redirect_field, expand(redirect_field, document)) == [
        {"host_name": "example.com"}
    ]
