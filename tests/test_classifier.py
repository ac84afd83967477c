"""Tests for rule-based listing classification."""

from decimal import Decimal

import pytest

from wardrobe_scraper.scrapers.adapters.zara import ZaraAdapter
from wardrobe_scraper.scrapers.utils.classifier import (
    CategoryRule,
    classify,
    classify_category,
    classify_tier,
    determine_gender,
    determine_weather,
)


class TestDetermineGender:
    """Tests for determine_gender."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Camiseta Feminina Basica", "female"),
            ("Vestido Midi Estampado", "female"),
            ("Camisa Social Masculina", "male"),
            ("Terno Slim", "male"),
            ("Tênis Casual Branco", "unisex"),
        ],
    )
    def test_name_keywords(self, name, expected):
        """Test gender detection from the product name."""
        assert determine_gender(name) == expected

    def test_female_checked_before_male(self):
        """Test that female keywords win when both are present."""
        assert determine_gender("Blusa Masculina") == "female"

    def test_category_hint_is_used(self):
        """Test the retailer category tag as a gender signal."""
        assert determine_gender("Calça Jeans Slim", "pants", "calcas-feminino") == "female"
        assert determine_gender("Calça Jeans Slim", "pants", "calcas-masculino") == "male"


class TestDetermineWeather:
    """Tests for determine_weather."""

    def test_default_when_no_signal(self):
        """Test the fallback tags."""
        assert determine_weather("pants", "Calça Jeans") == ["sunny", "cloudy"]

    def test_hot_signals(self):
        """Test summer fabrics and cuts."""
        assert determine_weather("shirt", "Regata Algodão") == ["hot", "sunny"]

    def test_multiple_groups_are_combined_in_order(self):
        """Test cold and rain signals together."""
        assert determine_weather("jacket", "Jaqueta Impermeável") == ["cold", "rain"]

    def test_no_duplicates(self):
        """Test that repeated signals produce each tag once."""
        tags = determine_weather("shirt", "Bermuda Verão Leve")
        assert tags == ["hot", "sunny"]


class TestClassifyTier:
    """Tests for classify_tier."""

    @pytest.mark.parametrize(
        "category,price,expected",
        [
            ("shirt", Decimal("60"), (True, False)),
            ("shirt", Decimal("80"), (True, False)),
            ("shirt", Decimal("350"), (False, True)),
            ("shirt", Decimal("150"), (False, False)),
            ("pants", Decimal("120"), (True, False)),
            ("dress", Decimal("600"), (False, True)),
            ("jacket", Decimal("90"), (True, False)),
            ("accessory", Decimal("250"), (False, True)),
        ],
    )
    def test_category_thresholds(self, category, price, expected):
        """Test per-category economic and luxury thresholds."""
        assert classify_tier(category, price) == expected

    def test_fallback_thresholds(self):
        """Test the global thresholds for unknown categories."""
        assert classify_tier("swimwear", Decimal("90")) == (True, False)
        assert classify_tier("swimwear", Decimal("450")) == (False, True)
        assert classify_tier("swimwear", Decimal("200")) == (False, False)

    def test_never_both(self):
        """Test that one listing is never economic and luxury at once."""
        for price in ("10", "100", "300", "1000"):
            assert classify_tier("shirt", Decimal(price)) != (True, True)


class TestClassifyCategory:
    """Tests for category decision lists."""

    def test_tag_keyword_match_with_subcategory(self):
        """Test that a category tag plus a name keyword select the subcategory."""
        assert classify_category(ZaraAdapter.CATEGORY_RULES, "calcas-masculino", "Calça Jeans Slim") == (
            "pants",
            "jeans",
        )

    def test_first_rule_wins(self):
        """Test ordered evaluation."""
        rules = (
            CategoryRule("shirt", "t-shirt", tag_keywords=("camiseta",)),
            CategoryRule("dress", "casual", name_keywords=("vestido",)),
        )
        assert classify_category(rules, "camisetas-feminino", "Vestido Camiseta") == ("shirt", "t-shirt")

    def test_fallback(self):
        """Test the default category when no rule fires."""
        assert classify_category(ZaraAdapter.CATEGORY_RULES, "outros", "Cinto de Couro") == ("shirt", "casual")


class TestClassify:
    """Tests for classify."""

    def test_fills_derived_fields(self, make_listing):
        """Test that classification returns a fully derived copy."""
        listing = make_listing(
            name="Calça Jeans Feminina",
            price=Decimal("129.90"),
            category_hint="calcas-feminino",
        )

        classified = classify(listing, ZaraAdapter.CATEGORY_RULES)

        assert classified is not listing
        assert classified.category == "pants"
        assert classified.subcategory == "jeans"
        assert classified.gender == "female"
        assert classified.is_economic is True
        assert classified.is_luxury is False
        assert classified.weather == ["sunny", "cloudy"]
        assert classified.product_url == listing.product_url
