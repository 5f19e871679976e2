import pytest

from newsdesk.core.tags import decode_tags, encode_tags


@pytest.mark.parametrize(
    "tags",
    [
        ["news"],
        ["go", "backend", "tutorial"],
        ["zeta", "alpha", "zeta"],
        ["with space", "Mixed-Case"],
    ],
)
def test_round_trip_preserves_order_and_values(tags):
    assert decode_tags(encode_tags(tags)) == tags


def test_encode_joins_with_comma():
    assert encode_tags(["a", "b", "c"]) == "a,b,c"


def test_empty_list_encodes_to_empty_string():
    assert encode_tags([]) == ""


def test_empty_string_decodes_to_single_empty_tag():
    assert decode_tags("") == [""]


def test_no_trimming_or_dedup():
    assert decode_tags("a, b,a") == ["a", " b", "a"]


def test_tag_containing_delimiter_does_not_survive_round_trip():
    # Known limitation: there is no escaping of embedded commas
    assert decode_tags(encode_tags(["a,b", "c"])) == ["a", "b", "c"]
