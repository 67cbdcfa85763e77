from __future__ import annotations
from typing import Dict, List, Optional

from data.swaps import INGREDIENT_SWAPS
from models.analysis import IngredientSwap
from models.dish import BCSResult, IngredientReference
from services.canonicalization import canonicalize


class SwapService:
    def __init__(self, swaps: Optional[Dict[str, List[str]]] = None):
        self.swaps = swaps if swaps is not None else INGREDIENT_SWAPS

    def _options_for(self, *terms: Optional[str]) -> List[str]:
        for term in terms:
            if not term:
                continue
            options = self.swaps.get(term.lower()) or self.swaps.get(canonicalize(term))
            if options:
                return options
        return []

    def suggest(self, bcs: BCSResult) -> List[IngredientSwap]:
        """One replacement per evidence item whose trigger or ingredient has a known swap."""
        modifications: List[IngredientSwap] = []
        for item in bcs.evidence:
            ingredient = IngredientReference.from_raw(item.ingredient).text
            options = self._options_for(item.matched_trigger, ingredient)
            if not options:
                continue
            swap = IngredientSwap(original=item.ingredient, swap=options[0], reason=item.reason)
            if swap not in modifications:
                modifications.append(swap)
        return modifications
