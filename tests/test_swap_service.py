from models.dish import BCSResult, EvidenceItem, Severity
from services.swap_service import SwapService


def evidence(ingredient, trigger, reason="Allergy", severity=Severity.CRITICAL):
    return EvidenceItem(ingredient=ingredient, matched_trigger=trigger, reason=reason, weight=100, severity=severity)


class TestSwapService:
    def test_trigger_swap_preferred(self):
        bcs = BCSResult(bio_score=0, block=True, evidence=[evidence("satay sauce", "peanut")])

        swaps = SwapService().suggest(bcs)

        assert len(swaps) == 1
        assert swaps[0].original == "satay sauce"
        assert swaps[0].swap == "sunflower seed butter"
        assert swaps[0].reason == "Allergy"

    def test_falls_back_to_canonical_ingredient(self):
        bcs = BCSResult(bio_score=85, evidence=[
            evidence("red wine", "fermented", "Fermented/Alcohol Sensitivity", Severity.CAUTION),
            evidence("Chilli, minced", "spicy", "Spice Sensitivity (Low Tolerance)", Severity.CAUTION),
        ])

        swaps = SwapService().suggest(bcs)

        assert [s.swap for s in swaps] == ["grape juice with a splash of vinegar", "sweet paprika"]

    def test_no_known_swap(self):
        bcs = BCSResult(bio_score=80, evidence=[
            evidence("habanero salsa", "very hot", "Very Spicy Ingredient", Severity.CAUTION),
        ])
        assert SwapService().suggest(bcs) == []

    def test_duplicates_collapse(self):
        item = evidence("milk", "lactose", "Intolerance", Severity.WARNING)
        bcs = BCSResult(bio_score=40, evidence=[item, item])
        assert len(SwapService().suggest(bcs)) == 1

    def test_custom_table(self):
        service = SwapService(swaps={"kimchi": ["pickled cucumber"]})
        bcs = BCSResult(bio_score=85, evidence=[
            evidence("kimchi", "fermented", "Fermented/Alcohol Sensitivity", Severity.CAUTION),
        ])
        assert service.suggest(bcs)[0].swap == "pickled cucumber"
