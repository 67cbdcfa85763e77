from typing import Dict, List, Set


_DAIRY = {"dairy", "lactose", "milk"}
_GLUTEN = {"gluten", "wheat"}

# surface term -> allergen / chemical categories it implies
HIDDEN_TRIGGERS: Dict[str, Set[str]] = {
    "soy sauce": _GLUTEN | {"soy"},
    "teriyaki": _GLUTEN | {"soy"},
    "miso": {"soy", "fermented"},
    "tofu": {"soy"},
    "tempeh": {"soy", "fermented"},
    "edamame": {"soy"},
    "seitan": _GLUTEN,
    "bread": _GLUTEN | {"yeast"},
    "bun": _GLUTEN | {"yeast"},
    "naan": _GLUTEN | {"yeast"} | _DAIRY,
    "pita": _GLUTEN | {"yeast"},
    "pasta": set(_GLUTEN),
    "noodle": set(_GLUTEN),
    "flour": set(_GLUTEN),
    "couscous": set(_GLUTEN),
    "semolina": set(_GLUTEN),
    "barley": {"gluten"},
    "rye": {"gluten"},
    "malt": {"gluten"},
    "beer": {"gluten", "alcohol", "fermented"},
    "pizza": _GLUTEN | _DAIRY,
    "cake": _GLUTEN | {"egg", "sugar"},
    "cookie": _GLUTEN | {"egg", "sugar"},
    "pastry": _GLUTEN | _DAIRY,
    "croissant": _GLUTEN | _DAIRY,
    "mayonnaise": {"egg"},
    "aioli": {"egg", "garlic"},
    "yogurt": set(_DAIRY),
    "cheese": _DAIRY | {"tyramine"},
    "cream": set(_DAIRY),
    "butter": set(_DAIRY),
    "milk": set(_DAIRY),
    "ghee": set(_DAIRY),
    "paneer": set(_DAIRY),
    "whey": set(_DAIRY),
    "casein": set(_DAIRY),
    "pesto": _DAIRY | {"tree nut", "pine nut"},
    "caesar": _DAIRY | {"egg", "fish", "anchovy"},
    "worcestershire": {"fish", "anchovy"},
    "fish sauce": {"fish"},
    "shrimp": {"shellfish"},
    "prawn": {"shellfish"},
    "crab": {"shellfish"},
    "lobster": {"shellfish"},
    "tahini": {"sesame"},
    "hummus": {"sesame", "chickpea"},
    "marzipan": {"tree nut", "almond"},
    "praline": {"tree nut"},
    "satay": {"peanut"},
    "wine": {"alcohol", "sulfites", "histamine", "fermented"},
    "vinegar": {"fermented"},
    "kimchi": {"fermented"},
    "sauerkraut": {"fermented"},
    "chocolate": {"caffeine", "sugar"},
}

# substrings that cancel a trigger key ("coconut milk" is not dairy)
TRIGGER_EXCEPTIONS: Dict[str, List[str]] = {
    "milk": ["coconut milk", "almond milk", "oat milk", "soy milk", "rice milk", "cashew milk"],
    "butter": ["peanut butter", "cocoa butter", "almond butter", "apple butter", "nut butter"],
    "cream": ["cream of tartar"],
    "noodle": ["rice noodle", "glass noodle"],
    "flour": ["rice flour", "almond flour", "coconut flour", "chickpea flour", "corn flour"],
    "pasta": ["rice pasta", "gluten-free pasta", "gluten free pasta"],
    "bread": ["gluten-free bread", "gluten free bread"],
}
