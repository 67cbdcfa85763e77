import pytest

from services.menu_extraction_service import (
    DishCandidateExtractor,
    display_name,
    is_price_only,
    is_section_header,
)


@pytest.fixture
def extractor():
    return DishCandidateExtractor()


class TestLineFilters:
    @pytest.mark.parametrize("line", ["APPETIZERS", "Desserts & Drinks", "Main Course", "Today's Specials"])
    def test_section_headers(self, line):
        assert is_section_header(line)

    @pytest.mark.parametrize("line", ["Maine Lobster Roll", "Chicken Dinner Plate", "Fish Tacos"])
    def test_not_section_headers(self, line):
        assert not is_section_header(line)

    @pytest.mark.parametrize("line", ["$14.99", "12.50", " 9 ", "€ 7,50"])
    def test_price_only(self, line):
        assert is_price_only(line)

    def test_text_with_price_is_not_price_only(self):
        assert not is_price_only("Soup 4.50")

    def test_display_name_strips_price_and_capitalizes(self):
        assert display_name("grilled  chicken with rice   $14.99") == "Grilled Chicken With Rice"
        assert display_name("- Fish Tacos (2) *") == "Fish Tacos (2)"


class TestExtract:
    def test_dish_line_with_price(self, extractor):
        candidates = extractor.extract("Grilled Chicken with Steamed Rice   $14.99")

        assert len(candidates) == 1
        dish = candidates[0]
        assert dish.name == "Grilled Chicken With Steamed Rice"
        assert dish.is_analyzed
        assert {"chicken", "rice"} <= set(dish.matched_ingredients)
        assert dish.confidence == len(dish.matched_ingredients)
        assert [p.name for p in dish.ingredient_profiles] == dish.matched_ingredients

    def test_headers_prices_and_short_lines_are_discarded(self, extractor):
        text = "\n".join([
            "APPETIZERS",
            "Tea",
            "$14.99",
            "",
            "Desserts & Drinks",
            "Main Course",
            "served until ten",
        ])
        assert extractor.extract(text) == []

    def test_ocr_typos_still_match(self, extractor):
        dish = extractor.extract("Grilld Chiken Salad")[0]

        assert dish.is_analyzed
        assert dish.matched_ingredients == ["chicken", "salad"]

    def test_multiword_keys_match_as_phrase(self, extractor):
        dish = extractor.extract("Vanilla Ice Cream Sundae")[0]
        assert "ice cream" in dish.matched_ingredients
        assert "cream" in dish.matched_ingredients

    def test_capitalized_unknown_line_is_unanalyzed_candidate(self, extractor):
        candidates = extractor.extract("Maine Lobster Roll  $24")

        assert len(candidates) == 1
        assert candidates[0].name == "Maine Lobster Roll"
        assert not candidates[0].is_analyzed
        assert candidates[0].matched_ingredients == []

    def test_long_unknown_line_is_dropped(self, extractor):
        line = "Ask Your Server About Tonight's Selection Of Seasonal Housemade Delights"
        assert extractor.extract(line) == []

    def test_duplicates_collapse_to_first(self, extractor):
        text = "Chicken Soup\nchicken  soup\nCHICKEN SOUP $5"
        candidates = extractor.extract(text)

        assert len(candidates) == 1
        assert candidates[0].original_text == "Chicken Soup"

    def test_order_follows_input(self, extractor):
        text = "Beef Burger\nDRINKS\nMushroom Risotto\nChocolate Cake"
        names = [c.name for c in extractor.extract(text)]
        assert names == ["Beef Burger", "Mushroom Risotto", "Chocolate Cake"]

    def test_empty_text(self, extractor):
        assert extractor.extract("") == []
        assert extractor.extract(None) == []

    def test_custom_knowledge_base(self):
        extractor = DishCandidateExtractor(knowledge_base={"kimchi": {"type": "vegan", "tags": ["Fermented"]}})
        dish = extractor.extract("Kimchi Fried Rice")[0]

        assert dish.matched_ingredients == ["kimchi"]
        assert dish.ingredient_profiles[0].tags == ["Fermented"]
