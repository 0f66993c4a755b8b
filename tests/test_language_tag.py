"""Tests for LanguageTag parsing, normalization and the tag parse cache.

Tests verify:
- Structural equality across case and separator variants
- BCP-47 and POSIX rendering
- Strict parse errors vs. non-raising cached parse (UND)
- Likely-subtag maximization used by the matcher
"""

from __future__ import annotations

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from langbundle.core import (
    UND,
    LanguageTag,
    coerce_language_tag,
    parse_language_tag,
    parse_language_tags,
)
from langbundle.diagnostics import InvalidLanguageTagError, LocalizationError


class TestLanguageTagParse:
    """Test LanguageTag.parse normalization."""

    def test_simple_language(self) -> None:
        """Bare language subtag parses with no other subtags."""
        tag = LanguageTag.parse("en")
        assert tag == LanguageTag("en")
        assert tag.script is None
        assert tag.territory is None

    def test_hyphen_and_underscore_equal(self) -> None:
        """zh-CN and zh_CN are the same tag."""
        assert LanguageTag.parse("zh-CN") == LanguageTag.parse("zh_CN")

    def test_case_insensitive(self) -> None:
        """Subtag case is normalized."""
        assert LanguageTag.parse("ZH-cn") == LanguageTag("zh", territory="CN")

    def test_script_and_territory(self) -> None:
        """Script is title-cased, territory upper-cased."""
        tag = LanguageTag.parse("zh-hant-tw")
        assert tag.script == "Hant"
        assert tag.territory == "TW"

    def test_str_is_bcp47(self) -> None:
        """str() joins subtags with hyphens."""
        assert str(LanguageTag.parse("zh_Hant_TW")) == "zh-Hant-TW"

    def test_posix_form(self) -> None:
        """posix joins subtags with underscores."""
        assert LanguageTag.parse("pt-BR").posix == "pt_BR"

    def test_surrounding_whitespace_ignored(self) -> None:
        """Leading and trailing whitespace is stripped."""
        assert LanguageTag.parse("  de  ") == LanguageTag("de")

    def test_tags_are_hashable(self) -> None:
        """Tags work as dictionary keys."""
        table = {LanguageTag.parse("en-US"): 1}
        assert table[LanguageTag.parse("en_us")] == 1


class TestLanguageTagParseErrors:
    """Test strict parse failures."""

    @pytest.mark.parametrize("identifier", ["", "   ", "1234", "e", "en-US-!!", "toolonglanguage"])
    def test_malformed_raises(self, identifier: str) -> None:
        """Malformed identifiers raise InvalidLanguageTagError."""
        with pytest.raises(InvalidLanguageTagError):
            LanguageTag.parse(identifier)

    def test_error_is_value_error(self) -> None:
        """InvalidLanguageTagError is catchable as ValueError and LocalizationError."""
        with pytest.raises(ValueError, match="Invalid language identifier"):
            LanguageTag.parse("")
        with pytest.raises(LocalizationError):
            LanguageTag.parse("")

    def test_error_carries_identifier(self) -> None:
        """The rejected identifier is available on the exception."""
        with pytest.raises(InvalidLanguageTagError) as exc_info:
            LanguageTag.parse("1234")
        assert exc_info.value.identifier == "1234"


class TestUndefinedTag:
    """Test the distinguished undefined tag."""

    def test_und_is_undefined(self) -> None:
        """UND reports is_undefined."""
        assert UND.is_undefined
        assert str(UND) == "und"

    def test_regular_tag_is_defined(self) -> None:
        """Parsed tags are not undefined."""
        assert not LanguageTag.parse("en").is_undefined

    def test_maximize_und_is_identity(self) -> None:
        """UND never gains subtags."""
        assert UND.maximize() is UND


class TestParseLanguageTag:
    """Test the cached, non-raising parser."""

    def test_valid_identifier(self) -> None:
        """Valid identifiers parse like LanguageTag.parse."""
        assert parse_language_tag("en-US") == LanguageTag.parse("en-US")

    def test_malformed_returns_und(self) -> None:
        """Malformed identifiers map to UND instead of raising."""
        assert parse_language_tag("!!") is UND
        assert parse_language_tag("") is UND

    def test_result_is_cached(self) -> None:
        """Repeated parses of one identifier return the same object."""
        first = parse_language_tag("fr-CA")
        assert parse_language_tag("fr-CA") is first
        assert parse_language_tag.cache_info().hits >= 1

    def test_parse_many_keeps_und_placeholders(self) -> None:
        """parse_language_tags keeps order and one result per input."""
        tags = parse_language_tags("en", "!!", "de")
        assert tags == (LanguageTag("en"), UND, LanguageTag("de"))

    def test_coerce_passes_tags_through(self) -> None:
        """coerce_language_tag returns LanguageTag inputs unchanged."""
        tag = LanguageTag("ja")
        assert coerce_language_tag(tag) is tag
        assert coerce_language_tag("ja") == tag

    @given(
        language=st.sampled_from(["en", "de", "zh", "pt", "sr"]),
        territory=st.sampled_from(["US", "DE", "CN", "BR", "RS"]),
        separator=st.sampled_from(["-", "_"]),
        upper=st.booleans(),
    )
    def test_separator_and_case_never_matter(
        self, language: str, territory: str, separator: str, upper: bool
    ) -> None:
        """Property: spelling variants of one identifier parse to one tag."""
        spelled = f"{language}{separator}{territory}"
        spelled = spelled.upper() if upper else spelled.lower()
        event(f"separator={separator!r}")
        assert parse_language_tag(spelled) == LanguageTag(language, territory=territory)


class TestMaximize:
    """Test likely-subtag expansion."""

    def test_english_gets_latin_us(self) -> None:
        """en maximizes to en-Latn-US."""
        assert LanguageTag.parse("en").maximize() == LanguageTag("en", "Latn", "US")

    def test_en_and_en_us_maximize_equal(self) -> None:
        """en and en-US are indistinguishable after maximization."""
        assert LanguageTag.parse("en").maximize() == LanguageTag.parse("en-US").maximize()

    def test_traditional_chinese_script(self) -> None:
        """zh-TW maximizes to the Hant script."""
        assert LanguageTag.parse("zh-TW").maximize().script == "Hant"

    def test_simplified_chinese_script(self) -> None:
        """zh-CN maximizes to the Hans script."""
        assert LanguageTag.parse("zh-CN").maximize().script == "Hans"

    def test_explicit_subtags_kept(self) -> None:
        """Subtags given by the caller are never replaced."""
        tag = LanguageTag.parse("en-GB").maximize()
        assert tag.territory == "GB"
        assert tag.script == "Latn"
