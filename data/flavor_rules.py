from typing import Dict, List, Tuple


# flavor-provider tag -> (axis, intensity)
FLAVOR_TAG_AXES: Dict[str, Tuple[str, float]] = {
    "sweet": ("sweet", 8),
    "bitter": ("bitter", 8),
    "sour": ("sour", 8),
    "spicy": ("spicy", 8),
    "savory": ("umami", 7),
    "meaty": ("umami", 7),
}

# ingredient-name keyword -> (axis, intensity); overrides tag-derived values
NAME_KEYWORD_AXES: List[Tuple[Tuple[str, ...], str, float]] = [
    (("sugar", "honey"), "sweet", 10),
    (("lemon", "vinegar"), "sour", 9),
    (("chili", "pepper"), "spicy", 9),
    (("cream", "milk", "cheese", "butter", "yogurt"), "creamy", 8),
    (("soy sauce", "mushroom", "meat", "broth"), "umami", 9),
]

# used when no ingredient contributes any signal
NEUTRAL_DISH_VECTOR: Dict[str, float] = {
    "sweet": 2, "spicy": 2, "bitter": 2, "sour": 2, "umami": 5, "creamy": 2,
}

SPICY_NAME_KEYWORDS: List[str] = [
    "chili", "pepper", "hot sauce", "curry", "jalapeno", "sriracha",
    "habanero", "ghost", "cayenne", "wasabi", "harissa", "gochujang",
]

VERY_HOT_NAME_KEYWORDS: List[str] = [
    "ghost", "habanero", "scotch bonnet", "carolina reaper", "bird's eye", "birds eye",
]

# matched against functional groups and the expanded trigger set
FERMENTED_MARKERS: List[str] = ["alcohol", "fermented"]

# non-spicy ingredients that contain a spicy keyword
SPICE_EXCEPTIONS: List[str] = ["bell pepper", "sweet pepper"]
