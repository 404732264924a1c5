"""Tests for LocaleTable configuration validation.

Python 3.13+.
"""

from typing import Any

import pytest
from hypothesis import given

from fluentbox.enums import LoadMethod
from fluentbox.errors import ConfigurationError
from fluentbox.localization.config import LocaleTable, parse_locale_or_raise
from tests.strategies.locales import locale_spellings


def build(**overrides: Any) -> LocaleTable:
    options: dict[str, Any] = {
        "locales": ["en-us", "pt-BR", "pt-PT"],
        "default_locale": "en-US",
        "source": "res/lang",
        "files": ["_.ftl"],
    }
    options.update(overrides)
    locales = options.pop("locales")
    return LocaleTable.build(locales, **options)


class TestLocaleTableBuild:
    """Test successful construction."""

    def test_locales_are_canonical(self) -> None:
        table = build()
        assert table.locales == frozenset({"en-US", "pt-BR", "pt-PT"})

    def test_raw_spelling_kept_as_path_component(self) -> None:
        table = build()
        assert table.path_component("en-US") == "en-us"
        assert table.path_component("pt-BR") == "pt-BR"

    def test_undeclared_fallback_uses_canonical_path(self) -> None:
        table = build(fallbacks={"pt-BR": ["es"]})
        assert table.path_component("es") == "es"

    def test_undeclared_variant_fallback_path_is_lower_case(self) -> None:
        table = build(fallbacks={"pt-BR": ["CA_ES_VALENCIA"]})
        assert table.fallbacks.fallbacks("pt-BR") == ("ca-ES-valencia",)
        assert table.path_component("ca-ES-valencia") == "ca-ES-valencia"

    def test_extension_subtags_accepted(self) -> None:
        table = build(locales=["en-US", "de-DE-u-co-phonebk"])
        assert table.supports("de-DE-u-co-phonebk")
        assert table.path_component("de-DE-u-co-phonebk") == "de-DE-u-co-phonebk"

    def test_duplicates_collapse_first_spelling_wins(self) -> None:
        table = build(locales=["en_US", "en-us", "EN-US"])
        assert table.locales == frozenset({"en-US"})
        assert table.path_component("en-US") == "en_US"

    def test_fallbacks_canonicalized(self) -> None:
        table = build(fallbacks={"pt_br": ["PT-pt", "en_us"]})
        assert table.fallbacks.direct("pt-BR") == ("pt-PT", "en-US")

    def test_defaults(self) -> None:
        table = build()
        assert table.clean is True
        assert table.method is LoadMethod.HTTP
        assert table.files == ("_.ftl",)
        assert len(table.fallbacks) == 0

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("http", LoadMethod.HTTP),
            ("filesystem", LoadMethod.FILE_SYSTEM),
            ("fileSystem", LoadMethod.FILE_SYSTEM),
            (LoadMethod.FILE_SYSTEM, LoadMethod.FILE_SYSTEM),
        ],
    )
    def test_method_spellings(self, method: str, expected: LoadMethod) -> None:
        assert build(method=method).method is expected

    def test_supports_uses_canonical_identifiers(self) -> None:
        table = build()
        assert table.supports("en-US")
        assert not table.supports("en-us")

    def test_files_accepts_any_iterable(self) -> None:
        table = build(files=(name for name in ["a.ftl", "b.ftl"]))
        assert table.files == ("a.ftl", "b.ftl")

    @given(locale_spellings())
    def test_any_spelling_declares_canonical_locale(self, pair: tuple[str, str]) -> None:
        canonical, spelling = pair
        table = build(locales=[spelling], default_locale=spelling)
        assert table.locales == frozenset({canonical})
        assert table.default_locale == canonical
        assert table.path_component(canonical) == spelling


class TestLocaleTableValidation:
    """Every malformed option is a ConfigurationError."""

    def test_malformed_locale(self) -> None:
        with pytest.raises(ConfigurationError, match="not a locale is a malformed locale"):
            build(locales=["en", "not a locale"])

    def test_locales_must_be_a_list(self) -> None:
        with pytest.raises(ConfigurationError, match="locales must be a list"):
            build(locales="en")

    def test_non_string_locale(self) -> None:
        with pytest.raises(ConfigurationError, match="malformed locale"):
            build(locales=["en", 7])

    def test_fallbacks_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="fallbacks must map"):
            build(fallbacks=[("en", ["de"])])

    def test_fallback_value_must_be_list(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a list"):
            build(fallbacks={"pt-BR": "pt-PT"})

    def test_fallback_value_none(self) -> None:
        with pytest.raises(ConfigurationError):
            build(fallbacks={"pt-BR": None})

    def test_fallback_item_must_be_string(self) -> None:
        with pytest.raises(ConfigurationError, match="fallbacks mapping is malformed"):
            build(fallbacks={"pt-BR": ["pt-PT", 3]})

    def test_fallback_key_malformed(self) -> None:
        with pytest.raises(ConfigurationError, match="malformed locale"):
            build(fallbacks={"pt BR": ["pt-PT"]})

    def test_fallback_target_malformed(self) -> None:
        with pytest.raises(ConfigurationError, match="malformed locale"):
            build(fallbacks={"pt-BR": ["pt PT"]})

    def test_default_locale_must_be_string(self) -> None:
        with pytest.raises(ConfigurationError, match="default_locale must be a string"):
            build(default_locale=None)

    def test_default_locale_malformed(self) -> None:
        with pytest.raises(ConfigurationError, match="malformed locale"):
            build(default_locale="en US")

    def test_source_must_be_string(self) -> None:
        with pytest.raises(ConfigurationError, match="source must be a string"):
            build(source=42)

    def test_files_must_be_list(self) -> None:
        with pytest.raises(ConfigurationError, match="files must be a list"):
            build(files="main.ftl")

    def test_file_names_must_be_strings(self) -> None:
        with pytest.raises(ConfigurationError, match="files entries must be strings"):
            build(files=["main.ftl", None])

    def test_clean_must_be_bool(self) -> None:
        with pytest.raises(ConfigurationError, match="clean must be a bool"):
            build(clean="yes")

    def test_unknown_method(self) -> None:
        with pytest.raises(ConfigurationError, match="method must be one of"):
            build(method="ftp")

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            build(method="ftp")


class TestParseLocaleOrRaise:
    """Test parse_locale_or_raise helper."""

    def test_returns_canonical(self) -> None:
        assert parse_locale_or_raise("pt_br") == "pt-BR"

    def test_chains_cause(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_locale_or_raise("??")
        assert isinstance(exc_info.value.__cause__, ValueError)
