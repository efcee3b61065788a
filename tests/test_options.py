from __future__ import annotations

from core.domain.options import overlay, rename_keys, to_query_params
from core.domain.vocabulary import Cities, Style


def test_overlay_caller_wins_on_collision():
    assert overlay({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}


def test_overlay_keeps_caller_none():
    merged = overlay({"a": 1, "b": 2}, {"b": None})

    assert "b" in merged
    assert merged["b"] is None
    assert merged["a"] == 1


def test_overlay_does_not_mutate_inputs():
    base = {"a": 1}
    options = {"a": 2}

    overlay(base, options)

    assert base == {"a": 1}
    assert options == {"a": 2}


def test_overlay_without_options_copies_base():
    base = {"a": 1}
    merged = overlay(base, None)

    assert merged == base
    assert merged is not base


def test_rename_keys_only_touches_supplied_keys():
    aliases = {"postalCode": "postalcode", "countryCode": "country"}

    assert rename_keys({"postalCode": "3580", "radius": 5}, aliases) == {"postalcode": "3580", "radius": 5}
    assert rename_keys({"countryCode": None}, aliases) == {"country": None}
    assert rename_keys(None, aliases) == {}


def test_to_query_params_drops_none_and_unwraps_enums():
    params = to_query_params(
        {"maxRows": 20, "radius": None, "style": Style.LONG, "cities": Cities.CITIES5000, "localCountry": True}
    )

    assert params == {"maxRows": 20, "style": "LONG", "cities": "cities5000", "localCountry": True}


def test_rename_keys_prefers_geonames_key_over_alias():
    aliases = {"countryCode": "country"}

    assert rename_keys({"countryCode": "BE", "country": "NL"}, aliases) == {"country": "NL"}
    assert rename_keys({"country": "NL", "countryCode": "BE"}, aliases) == {"country": "NL"}
    assert rename_keys({"countryCode": "BE", "country": None}, aliases) == {"country": None}
