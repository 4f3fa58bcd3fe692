"""Unit tests for ingredient name matching."""

import pytest

from cookshare.normalize.ingredients import are_similar, normalize_ingredient_name


class TestNormalizeIngredientName:
    """Tests for normalize_ingredient_name function."""

    def test_lowercases_and_trims(self):
        assert normalize_ingredient_name("  Basil  ") == "basil"

    def test_removes_descriptors(self):
        assert normalize_ingredient_name("Fresh Chopped Basil") == "basil"
        assert normalize_ingredient_name("Organic   whole  milk") == "milk"
        assert normalize_ingredient_name("ground cumin") == "cumin"

    def test_descriptor_inside_word_is_kept(self):
        assert normalize_ingredient_name("freshwater fish") == "freshwater fish"

    def test_collapses_whitespace(self):
        assert normalize_ingredient_name("red   bell\tpepper") == "red bell pepper"


class TestAreSimilar:
    """Tests for are_similar function."""

    def test_exact_match_ignoring_case(self):
        assert are_similar("SALT", "salt")

    def test_descriptor_and_containment(self):
        assert are_similar("Fresh Tomatoes", "cherry tomato")

    def test_containment_either_direction(self):
        assert are_similar("tomato", "cherry tomatoes")
        assert are_similar("cherry tomatoes", "tomato")
        assert are_similar("Onion", "yellow onion")

    @pytest.mark.parametrize(
        "name1, name2",
        [
            ("Garlic cloves", "minced garlic"),
            ("Red Onion", "onions"),
            ("olive oil", "vegetable oil"),
            ("sea salt", "kosher salt"),
            ("black pepper", "white pepper"),
            ("salted butter", "unsalted butter"),
        ],
    )
    def test_same_family(self, name1, name2):
        assert are_similar(name1, name2)

    @pytest.mark.parametrize(
        "name1, name2",
        [
            ("chicken breast", "chicken stock"),
            ("flour", "sugar"),
            ("scallion", "green onion"),
            ("basil", "oregano"),
        ],
    )
    def test_distinct_ingredients(self, name1, name2):
        assert not are_similar(name1, name2)
