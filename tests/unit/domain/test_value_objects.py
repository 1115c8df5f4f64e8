"""Tests for slug derivation and email validation."""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from agencyhub.domain.value_objects import EmailAddress, Slug, slugify

SLUG_ALPHABET = re.compile(r"^[a-z0-9-]*$")


class TestSlugify:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Café Müller", "cafe-muller"),
            ("Acme Dental  Clinic", "acme-dental-clinic"),
            ("  --Hello, World!--  ", "hello-world"),
            ("Niño & Señora S.A.", "nino-senora-s-a"),
            ("ALL CAPS 2024", "all-caps-2024"),
        ],
    )
    def test_known_names(self, name, expected):
        assert slugify(name) == expected

    def test_empty_and_symbol_only_names_give_empty_slug(self):
        assert slugify("") == ""
        assert slugify("!!! ???") == ""

    @given(st.text())
    def test_output_alphabet_and_trimmed(self, text):
        slug = slugify(text)
        assert SLUG_ALPHABET.match(slug)
        assert not slug.startswith("-")
        assert not slug.endswith("-")
        assert "--" not in slug

    @given(st.text())
    def test_idempotent(self, text):
        once = slugify(text)
        assert slugify(once) == once


class TestSlug:

    def test_wraps_derived_value(self):
        assert str(Slug("Café Müller")) == "cafe-muller"

    def test_rejects_name_without_letters_or_digits(self):
        with pytest.raises(ValueError):
            Slug("***")


class TestEmailAddress:

    def test_normalizes_case_and_whitespace(self):
        assert EmailAddress("  Owner@Example.COM ").value == "owner@example.com"

    @pytest.mark.parametrize("raw", ["", "no-at-sign", "a@b", "two words@example.com"])
    def test_rejects_malformed(self, raw):
        with pytest.raises(ValueError):
            EmailAddress(raw)
