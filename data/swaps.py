from typing import Dict, List


# problem ingredient or trigger -> safer replacements, best first
INGREDIENT_SWAPS: Dict[str, List[str]] = {
    "peanut": ["sunflower seed butter", "toasted pumpkin seeds"],
    "tree nut": ["toasted sunflower seeds", "roasted chickpeas"],
    "milk": ["oat milk", "lactose-free milk"],
    "lactose": ["lactose-free milk", "oat milk"],
    "dairy": ["oat milk", "coconut yogurt"],
    "cheese": ["nutritional yeast", "lactose-free cheese"],
    "cream": ["coconut cream", "cashew cream"],
    "butter": ["olive oil", "vegan butter"],
    "yogurt": ["coconut yogurt", "lactose-free yogurt"],
    "gluten": ["gluten-free pasta", "rice noodles"],
    "wheat": ["rice flour", "buckwheat"],
    "pasta": ["gluten-free pasta", "zucchini noodles"],
    "bread": ["gluten-free bread", "lettuce wraps"],
    "soy sauce": ["coconut aminos", "tamari (gluten-free)"],
    "soy": ["coconut aminos", "chickpeas"],
    "egg": ["flax egg", "chia egg"],
    "shrimp": ["king oyster mushroom", "firm white fish"],
    "shellfish": ["firm tofu", "chicken"],
    "fish": ["firm tofu", "chicken"],
    "sesame": ["sunflower seeds", "olive oil"],
    "chili": ["sweet paprika", "bell pepper"],
    "wine": ["grape juice with a splash of vinegar", "stock"],
    "beer": ["non-alcoholic malt drink", "stock"],
    "vinegar": ["lemon juice", "lime juice"],
}
