"""Tests for IdOrSlug parsing and slug validation."""

import pytest

from catalog.core.domain_types import IdOrSlug, is_valid_slug
from catalog.core.errors import MalformedFilterError


def test_digits_parse_as_id():
    assert IdOrSlug.parse("42") == IdOrSlug(id=42)


def test_int_parses_as_id():
    assert IdOrSlug.parse(7).id == 7


def test_slug_parses_as_slug():
    parsed = IdOrSlug.parse("linux-x64")
    assert parsed.slug == "linux-x64"
    assert parsed.id is None


def test_surrounding_whitespace_ignored():
    assert IdOrSlug.parse("  genesis ").slug == "genesis"


def test_digit_led_slug_is_slug():
    assert IdOrSlug.parse("3do").slug == "3do"


@pytest.mark.parametrize(
    "raw", ["", "Has Space", "UPPER", "-dash", "a" * 65, "ümlaut", "²", "١٢٣"],
)
def test_malformed_identity_raises(raw):
    with pytest.raises(MalformedFilterError) as exc_info:
        IdOrSlug.parse(raw)
    assert exc_info.value.field == "identity"


def test_both_id_and_slug_rejected():
    with pytest.raises(MalformedFilterError):
        IdOrSlug(id=1, slug="picodrive")


def test_empty_identity():
    assert IdOrSlug().is_empty
    assert not IdOrSlug(slug="x").is_empty


def test_str_renders_whichever_is_set():
    assert str(IdOrSlug(id=5)) == "5"
    assert str(IdOrSlug(slug="nes")) == "nes"


def test_slug_length_limit():
    assert is_valid_slug("a" * 64)
    assert not is_valid_slug("a" * 65)
