from typing import Dict, Any, List


# menu keyword -> chemical profile used by the OCR dish extractor
FOOD_KNOWLEDGE_BASE: Dict[str, Dict[str, Any]] = {
    # proteins
    "chicken": {"type": "non-veg", "tags": ["Lean Protein"], "chemicals": {"Purine": "Moderate"}},
    "beef": {"type": "non-veg", "tags": ["Red Meat"], "chemicals": {"SaturatedFat": "High", "Histamine": "Moderate"}, "triggers": ["High Cholesterol"]},
    "pork": {"type": "non-veg", "tags": ["Red Meat"], "chemicals": {"Histamine": "High"}, "triggers": ["Inflammation"]},
    "lamb": {"type": "non-veg", "tags": ["Red Meat"], "chemicals": {"SaturatedFat": "High"}, "triggers": ["High Cholesterol"]},
    "steak": {"type": "non-veg", "tags": ["Red Meat"], "chemicals": {"SaturatedFat": "High"}, "triggers": ["High Cholesterol"]},
    "burger": {"type": "non-veg", "tags": ["Red Meat"], "chemicals": {"SaturatedFat": "High"}, "triggers": ["High Cholesterol"]},
    "bacon": {"type": "non-veg", "tags": ["Red Meat", "Processed"], "chemicals": {"Sodium": "High", "Nitrates": "High"}, "triggers": ["Hypertension"]},
    "fish": {"type": "non-veg", "tags": ["Seafood"], "chemicals": {"Omega3": "High"}, "triggers": ["Fish Allergy"]},
    "salmon": {"type": "non-veg", "tags": ["Seafood"], "chemicals": {"Omega3": "Very High"}, "benefits": ["Heart Health"]},
    "shrimp": {"type": "non-veg", "tags": ["Shellfish"], "chemicals": {"Cholesterol": "High"}, "triggers": ["Shellfish Allergy"]},
    "tofu": {"type": "vegan", "tags": ["Soy"], "chemicals": {"Isoflavones": "High"}, "benefits": ["Plant Protein"]},
    "egg": {"type": "non-veg", "tags": ["Egg"], "triggers": ["Egg Allergy"]},

    # dairy
    "cheese": {"type": "veg", "tags": ["Dairy"], "chemicals": {"Tyramine": "High", "SaturatedFat": "High"}, "triggers": ["Lactose", "Migraines"]},
    "parmesan": {"type": "veg", "tags": ["Dairy", "Aged Cheese"], "chemicals": {"Tyramine": "Very High", "Glutamate": "High"}, "triggers": ["Migraines"]},
    "milk": {"type": "veg", "tags": ["Dairy"], "chemicals": {"Lactose": "High"}, "triggers": ["Lactose"]},
    "cream": {"type": "veg", "tags": ["Dairy"], "chemicals": {"SaturatedFat": "High"}, "triggers": ["Lactose"]},
    "yogurt": {"type": "veg", "tags": ["Dairy"], "chemicals": {"Probiotics": "High"}, "benefits": ["Gut Health"]},
    "ice cream": {"type": "veg", "tags": ["Dairy", "Dessert"], "chemicals": {"Sugar": "High", "Lactose": "High"}, "triggers": ["Lactose"]},

    # grains
    "pasta": {"type": "veg", "tags": ["Wheat"], "chemicals": {"Gluten": "High"}, "triggers": ["Gluten", "Celiac"]},
    "spaghetti": {"type": "veg", "tags": ["Wheat"], "chemicals": {"Gluten": "High"}, "triggers": ["Gluten"]},
    "fettuccine": {"type": "veg", "tags": ["Wheat"], "chemicals": {"Gluten": "High"}, "triggers": ["Gluten"]},
    "penne": {"type": "veg", "tags": ["Wheat"], "chemicals": {"Gluten": "High"}, "triggers": ["Gluten"]},
    "noodle": {"type": "veg", "tags": ["Wheat"], "chemicals": {"Gluten": "High"}, "triggers": ["Gluten"]},
    "pizza": {"type": "veg", "tags": ["Wheat", "Dairy"], "chemicals": {"Gluten": "High", "SaturatedFat": "High"}, "triggers": ["Gluten", "Lactose"]},
    "bread": {"type": "veg", "tags": ["Wheat"], "chemicals": {"Gluten": "High"}, "triggers": ["Gluten"]},
    "rice": {"type": "vegan", "tags": ["Grains"], "chemicals": {"Arsenic": "Trace"}, "benefits": ["Gluten Free"]},
    "quinoa": {"type": "vegan", "tags": ["Ancient Grain"], "chemicals": {"Fiber": "High"}, "benefits": ["Complete Protein"]},

    # vegetables and fruit
    "tomato": {"type": "vegan", "tags": ["Nightshade"], "chemicals": {"Lycopene": "High", "Acid": "High"}, "triggers": ["Acid Reflux", "Nightshade Sensitivity"]},
    "potato": {"type": "vegan", "tags": ["Nightshade"], "chemicals": {"Solanine": "Trace"}, "triggers": ["Nightshade Sensitivity"]},
    "mushroom": {"type": "vegan", "tags": ["Fungi"], "chemicals": {"BetaGlucans": "High"}, "benefits": ["Immunity"]},
    "spinach": {"type": "vegan", "tags": ["Leafy Green"], "chemicals": {"Oxalates": "High"}, "triggers": ["Kidney Stones"]},
    "lemon": {"type": "vegan", "tags": ["Citrus"], "chemicals": {"CitricAcid": "High"}, "triggers": ["Acid Reflux"]},
    "avocado": {"type": "vegan", "tags": ["Healthy Fat"], "chemicals": {"Potassium": "High"}, "benefits": ["Heart Health"]},
    "salad": {"type": "vegan", "tags": ["Vegetable"], "chemicals": {"Fiber": "High"}, "benefits": ["Digestion"]},
    "soup": {"type": "veg", "tags": ["Liquid"], "chemicals": {"Sodium": "Moderate"}, "benefits": ["Hydration"]},

    # spices, condiments, drinks
    "spicy": {"type": "vegan", "tags": ["Spicy"], "chemicals": {"Capsaicin": "High"}, "triggers": ["Acid Reflux", "IBS"]},
    "chili": {"type": "vegan", "tags": ["Spicy"], "chemicals": {"Capsaicin": "Very High"}, "triggers": ["Acid Reflux"]},
    "curry": {"type": "vegan", "tags": ["Spicy"], "chemicals": {"Capsaicin": "Moderate"}, "triggers": ["Acid Reflux"]},
    "garlic": {"type": "vegan", "tags": ["High FODMAP"], "chemicals": {"Fructans": "High"}, "triggers": ["IBS"]},
    "onion": {"type": "vegan", "tags": ["High FODMAP"], "chemicals": {"Fructans": "High"}, "triggers": ["IBS"]},
    "wine": {"type": "vegan", "tags": ["Alcohol"], "chemicals": {"Sulfites": "High", "Histamine": "High"}, "triggers": ["Migraines", "Histamine Intolerance"]},
    "beer": {"type": "vegan", "tags": ["Alcohol"], "chemicals": {"Gluten": "Moderate", "Histamine": "Moderate"}, "triggers": ["Gluten"]},
    "soy": {"type": "vegan", "tags": ["Soy"], "chemicals": {"Phytoestrogens": "High"}, "triggers": ["Soy Allergy"]},
    "peanut": {"type": "vegan", "tags": ["Nut"], "chemicals": {"Aflatoxin": "Trace"}, "triggers": ["Peanut Allergy"]},
    "nut": {"type": "vegan", "tags": ["Tree Nut"], "triggers": ["Tree Nut Allergy"]},

    # sweets
    "cake": {"type": "veg", "tags": ["Dessert"], "chemicals": {"Sugar": "Very High"}, "triggers": ["Diabetes"]},
    "chocolate": {"type": "veg", "tags": ["Dessert"], "chemicals": {"Sugar": "High", "Caffeine": "Moderate"}, "triggers": ["Migraines"]},
}


# words that make up a menu section header line ("APPETIZERS", "Desserts & Drinks")
MENU_SECTION_WORDS: List[str] = [
    "menu", "appetizer", "starter", "entree", "main", "course", "dessert",
    "drink", "beverage", "side", "special", "breakfast", "lunch", "dinner",
]

# filler words allowed inside a header line
MENU_HEADER_FILLERS: List[str] = ["and", "the", "our", "of", "todays", "today", "s"]
