import pytest

from config.rules import ScoringWeights
from models.dish import Dish, Severity
from models.flavor import FlavorRecord
from models.profile import SpiceTolerance, UserSensitivityProfile
from services.bcs_service import BioCompatibilityService


@pytest.fixture
def service():
    return BioCompatibilityService()


class TestHardBlocks:
    def test_title_scan_blocks_when_ingredients_omit_allergen(self, service):
        profile = UserSensitivityProfile(allergies={"peanut"})
        dish = Dish(title="Thai Peanut Noodles", ingredients=["rice noodles", "lime", "cilantro"])

        result = service.evaluate(dish, profile)

        assert result.block
        assert result.bio_score == 0
        assert result.evidence[0].reason == "Allergy (Title Match)"
        assert result.evidence[0].severity == Severity.CRITICAL

    def test_allergy_declared_as_synonym(self, service):
        profile = UserSensitivityProfile(allergies={"groundnuts"})
        result = service.evaluate(Dish(title="Satay Skewers", ingredients=["chicken", "satay sauce"]), profile)
        assert result.block

    def test_hidden_trigger_blocks(self, service):
        profile = UserSensitivityProfile(allergies={"gluten"})
        dish = Dish(title="Stir Fry", ingredients=["broccoli", "soy sauce, low sodium"])

        result = service.evaluate(dish, profile)

        assert result.block
        critical = [e for e in result.evidence if e.severity == Severity.CRITICAL]
        assert critical[0].ingredient == "soy sauce"
        assert critical[0].matched_trigger == "gluten"

    def test_trigger_exceptions_do_not_block(self, service):
        profile = UserSensitivityProfile(allergies={"dairy"})
        dish = Dish(title="Curry", ingredients=["coconut milk", "peanut butter"])
        assert not service.evaluate(dish, profile).block

    def test_block_overrides_accumulated_deductions(self, service):
        profile = UserSensitivityProfile(
            allergies={"shrimp"},
            intolerances={"lactose"},
            spice_tolerance=SpiceTolerance.LOW,
        )
        dish = Dish(title="Shrimp Alfredo", ingredients=["prawns", "cream", "chili flakes"])

        result = service.evaluate(dish, profile)

        assert result.block
        assert result.bio_score == 0
        assert len(result.evidence) == 4


class TestDeductions:
    def test_intolerance_deducts_without_blocking(self, service):
        profile = UserSensitivityProfile(intolerances={"lactose"})
        result = service.evaluate(Dish(title="Breakfast Bowl", ingredients=["milk", "cereal"]), profile)

        assert not result.block
        assert 0 < result.bio_score <= 70
        assert result.evidence[0].severity == Severity.WARNING
        assert result.evidence[0].weight == 30

    def test_fermented_only_when_sensitive(self, service):
        dish = Dish(title="Coq au Vin", ingredients=["chicken", "red wine"])
        records = {"wine": FlavorRecord(canonical_name="wine", functional_groups={"alcohol"})}

        sensitive = service.evaluate(dish, UserSensitivityProfile(fermented_sensitive=True), records)
        tolerant = service.evaluate(dish, UserSensitivityProfile(), records)

        assert sensitive.bio_score == 85
        assert sensitive.evidence[0].severity == Severity.CAUTION
        assert tolerant.bio_score == 100

    def test_fermented_from_functional_groups(self, service):
        dish = Dish(title="Glazed Ham", ingredients=["mystery glaze"])
        records = {"mystery glaze": FlavorRecord(canonical_name="mystery glaze", functional_groups={"alcohol"})}

        result = service.evaluate(dish, UserSensitivityProfile(fermented_sensitive=True), records)
        assert result.bio_score == 85

    @pytest.mark.parametrize("tolerance,ingredient,expected", [
        (SpiceTolerance.LOW, "chili flakes", 80),
        (SpiceTolerance.LOW, "bell pepper", 100),
        (SpiceTolerance.MEDIUM, "chili flakes", 100),
        (SpiceTolerance.MEDIUM, "habanero salsa", 90),
        (SpiceTolerance.HIGH, "ghost pepper", 100),
    ])
    def test_spice_tolerance(self, service, tolerance, ingredient, expected):
        profile = UserSensitivityProfile(spice_tolerance=tolerance)
        result = service.evaluate(Dish(title="Dish", ingredients=[ingredient]), profile)
        assert result.bio_score == expected

    def test_spicy_flavor_tag_counts_without_keyword(self, service):
        records = {"gochugaru": FlavorRecord(canonical_name="gochugaru", flavor_profile={"spicy"})}
        profile = UserSensitivityProfile(spice_tolerance=SpiceTolerance.LOW)
        result = service.evaluate(Dish(title="Stew", ingredients=["gochugaru"]), profile, records)
        assert result.bio_score == 80

    def test_every_deduction_has_one_evidence_item(self, service):
        profile = UserSensitivityProfile(
            intolerances={"lactose"},
            fermented_sensitive=True,
            spice_tolerance=SpiceTolerance.LOW,
        )
        dish = Dish(title="Dinner", ingredients=["cheese", "beer", "chili"])

        result = service.evaluate(dish, profile)

        deducted = sum(e.weight for e in result.evidence)
        assert result.bio_score == 100 - deducted

    def test_weights_are_configurable(self):
        service = BioCompatibilityService(ScoringWeights(intolerance_penalty=25))
        profile = UserSensitivityProfile(intolerances={"lactose"})
        result = service.evaluate(Dish(title="Latte", ingredients=["milk"]), profile)
        assert result.bio_score == 75


class TestBounds:
    def test_score_clamped_at_zero_without_block(self, service):
        profile = UserSensitivityProfile(intolerances={"lactose"})
        dish = Dish(title="Dairy Plate", ingredients=["milk", "cream", "butter", "yogurt"])

        result = service.evaluate(dish, profile)

        assert not result.block
        assert result.bio_score == 0

    @pytest.mark.parametrize("ingredients", [
        [], ["milk"], ["peanuts", "milk"], ["chili", "wine", "cheese", "bread"],
    ])
    def test_critical_implies_block_and_zero(self, service, ingredients):
        profile = UserSensitivityProfile(
            allergies={"peanut"},
            intolerances={"lactose", "gluten"},
            fermented_sensitive=True,
            spice_tolerance=SpiceTolerance.LOW,
        )
        result = service.evaluate(Dish(title="Chef Special", ingredients=ingredients), profile)

        assert 0 <= result.bio_score <= 100
        if result.has_critical:
            assert result.block
            assert result.bio_score == 0


class TestMissingData:
    def test_no_ingredients_is_neutral(self, service):
        result = service.evaluate(Dish(title="Mystery", ingredients=[]), UserSensitivityProfile())

        assert result.bio_score == 50
        assert not result.block
        assert len(result.warnings) == 1

    def test_blank_ingredients_count_as_missing(self, service):
        result = service.evaluate(Dish(title="Mystery", ingredients=["", "  "]), UserSensitivityProfile())
        assert result.bio_score == 50

    def test_unanalyzed_dish_is_neutral(self, service):
        dish = Dish(title="Peanut Surprise", ingredients=[], is_analyzed=False)
        result = service.evaluate(dish, UserSensitivityProfile(allergies={"peanut"}))

        assert result.bio_score == 50
        assert not result.block
        assert "Insufficient data" in result.warnings[0]

    def test_none_profile_fails_fast(self, service):
        with pytest.raises(ValueError):
            service.evaluate(Dish(title="Soup", ingredients=["water"]), None)


class TestSensitivityTerms:
    def test_chemical_terms_match_intolerances(self, service):
        dish = Dish(
            title="Braised Pork Belly",
            ingredients=["pork"],
            sensitivity_terms={"pork": ["inflammation", "histamine"]},
        )

        result = service.evaluate(dish, UserSensitivityProfile(intolerances={"histamine"}))

        assert result.bio_score == 70
        assert result.evidence[0].matched_trigger == "histamine"
        assert result.evidence[0].severity == Severity.WARNING

    def test_terms_only_apply_to_their_ingredient(self, service):
        dish = Dish(
            title="Garlic Bread",
            ingredients=["garlic", "bread"],
            sensitivity_terms={"garlic": ["ibs", "fructans"], "bread": ["gluten"]},
        )

        result = service.evaluate(dish, UserSensitivityProfile(intolerances={"fructans"}))

        assert [e.ingredient for e in result.evidence] == ["garlic"]
        assert result.bio_score == 70
