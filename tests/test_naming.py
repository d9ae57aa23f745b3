"""Tests for BEM class-name parsing."""

import pytest

from vanilla_web_lint.naming import BemName, bem_violation_reason, is_bem, is_exempt, parse_bem


class TestParseBem:
    """Test splitting class names into block, element and modifier."""

    def test_block_only(self) -> None:
        assert parse_bem("card") == BemName(block="card")

    def test_full_name(self) -> None:
        parsed = parse_bem("block__element--modifier")
        assert parsed == BemName(block="block", element="element", modifier="modifier")

    def test_modifier_with_value(self) -> None:
        parsed = parse_bem("button--size_large")
        assert parsed is not None
        assert parsed.block == "button"
        assert parsed.element is None
        assert parsed.modifier == "size"
        assert parsed.value == "large"

    def test_hyphenated_parts(self) -> None:
        parsed = parse_bem("site-header__nav-item--is-open")
        assert parsed is not None
        assert parsed.block == "site-header"
        assert parsed.element == "nav-item"
        assert parsed.modifier == "is-open"

    def test_str_round_trips_name(self) -> None:
        for name in ("menu", "menu__item", "menu__item--active", "button--size_large"):
            parsed = parse_bem(name)
            assert parsed is not None
            assert str(parsed) == name

    @pytest.mark.parametrize(
        "name",
        ["navItem", "Card", "a__b__c", "a--b--c", "a--b__c", "card_title", "1col", "-card", "card---x", ""],
    )
    def test_rejects_invalid_names(self, name: str) -> None:
        assert parse_bem(name) is None
        assert not is_bem(name)


class TestViolationReason:
    """Test the human-readable explanation for invalid names."""

    def test_valid_name_has_no_reason(self) -> None:
        assert bem_violation_reason("block__element--modifier") is None

    @pytest.mark.parametrize(
        "name, reason",
        [
            ("navItem", "uses camelCase"),
            ("Card", "uses an uppercase letter"),
            ("a__b__c", "repeats the element separator '__'"),
            ("a--b--c", "repeats the modifier separator '--'"),
            ("a--b__c", "places the modifier before the element"),
            ("card_title", "uses underscores outside the element separator"),
            ("1col", "does not start with a letter"),
            ("card$", "contains characters outside [a-z0-9-_]"),
        ],
    )
    def test_reasons(self, name: str, reason: str) -> None:
        assert bem_violation_reason(name) == reason


class TestUtilityPrefixes:
    """Test exemption of utility classes."""

    def test_default_prefixes(self) -> None:
        assert is_exempt("js-toggle")
        assert is_exempt("is-active")
        assert is_exempt("has-dropdown")
        assert not is_exempt("card")

    def test_custom_prefixes(self) -> None:
        assert is_exempt("u-hidden", ["u-"])
        assert not is_exempt("js-toggle", ["u-"])

    def test_empty_prefix_is_ignored(self) -> None:
        assert not is_exempt("anything", [""])
