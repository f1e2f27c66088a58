import pytest

from resourcekit.exceptions import MalformedIdentityError
from resourcekit.identity import IdentityFormat, format_identity, parse_identity

BUCKET_ID = IdentityFormat(first="BUCKET", second="EXPECTED_BUCKET_OWNER")


class TestIdentityFormat:
    def test_format(self):
        assert BUCKET_ID.format("my-bucket", "") == "my-bucket"
        assert BUCKET_ID.format("my-bucket", "123456789012") == "my-bucket,123456789012"
        assert BUCKET_ID.format("", "123456789012") == "123456789012"
        assert BUCKET_ID.format("", "") == ""

    def test_parse(self):
        assert BUCKET_ID.parse("my-bucket") == ("my-bucket", "")
        assert BUCKET_ID.parse("my-bucket,123456789012") == ("my-bucket", "123456789012")

    @pytest.mark.parametrize("identity", ["", ",", "a,", ",b", "a,b,c"])
    def test_parse_malformed(self, identity):
        with pytest.raises(MalformedIdentityError) as e:
            BUCKET_ID.parse(identity)

        assert e.value.identity == identity
        assert str(e.value) == (
            f"unexpected format for ID ({identity}), expected BUCKET or BUCKET,EXPECTED_BUCKET_OWNER"
        )

    @pytest.mark.parametrize(
        "first, second", [("my-bucket", ""), ("my-bucket", "123456789012"), ("a.b-c", "x")]
    )
    def test_round_trip(self, first, second):
        assert BUCKET_ID.parse(BUCKET_ID.format(first, second)) == (first, second)

    def test_owner_only_id_parses_as_name(self):
        # an id formatted without a first component cannot be told apart from a plain name
        assert BUCKET_ID.parse(BUCKET_ID.format("", "123456789012")) == ("123456789012", "")

    def test_custom_delimiter(self):
        identity_format = IdentityFormat(delimiter="/")
        assert identity_format.format("a", "b") == "a/b"
        assert identity_format.parse("a/b") == ("a", "b")
        assert identity_format.parse("a,b") == ("a,b", "")


def test_default_format():
    assert format_identity("name", "owner") == "name,owner"
    assert parse_identity("name,owner") == ("name", "owner")

    with pytest.raises(MalformedIdentityError, match=r"expected NAME or NAME,OWNER"):
        parse_identity("a,b,c")
