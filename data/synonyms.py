from typing import Dict, List


# canonical term: surface forms that resolve to it
INGREDIENT_SYNONYMS: Dict[str, List[str]] = {
    "peanut": ["peanuts", "groundnut", "groundnuts", "goober", "monkey nut", "arachis"],
    "tree nut": ["tree nuts", "nuts", "almond", "almonds", "cashew", "cashews", "walnut", "walnuts",
                 "pecan", "pecans", "hazelnut", "hazelnuts", "pistachio", "pistachios"],
    "milk": ["whole milk", "skim milk", "cow milk", "cow's milk", "dairy milk", "2% milk"],
    "cheese": ["cheddar", "mozzarella", "parmesan", "parmigiano", "feta", "gouda", "brie", "paneer"],
    "cream": ["heavy cream", "whipping cream", "double cream", "sour cream", "creme fraiche"],
    "butter": ["unsalted butter", "salted butter", "ghee", "clarified butter"],
    "yogurt": ["yoghurt", "curd", "greek yogurt", "dahi"],
    "lactose": ["milk sugar"],
    "egg": ["eggs", "egg yolk", "egg white", "whole egg"],
    "wheat": ["wheat flour", "all-purpose flour", "all purpose flour", "maida", "semolina", "durum"],
    "gluten": ["wheat gluten", "vital wheat gluten"],
    "soy": ["soya", "soybean", "soybeans", "soy bean", "edamame"],
    "soy sauce": ["shoyu", "tamari", "light soy sauce", "dark soy sauce"],
    "shrimp": ["prawn", "prawns", "shrimps"],
    "shellfish": ["crab", "lobster", "crayfish", "scallop", "scallops", "mussel", "mussels", "clam", "clams", "oyster", "oysters"],
    "fish": ["cod", "tilapia", "haddock", "anchovy", "anchovies", "sardine", "sardines", "tuna"],
    "chili": ["chilli", "chile", "chili pepper", "chilli pepper", "red chili", "green chili", "cayenne"],
    "bell pepper": ["capsicum", "sweet pepper"],
    "cilantro": ["coriander leaves", "fresh coriander", "chinese parsley"],
    "scallion": ["green onion", "spring onion", "green onions", "spring onions"],
    "eggplant": ["aubergine", "brinjal"],
    "zucchini": ["courgette"],
    "chickpea": ["chickpeas", "garbanzo", "garbanzo beans", "chana"],
    "tomato": ["tomatoes", "cherry tomato", "cherry tomatoes", "roma tomato"],
    "potato": ["potatoes", "aloo"],
    "sesame": ["sesame seed", "sesame seeds", "til", "tahini"],
    "mustard": ["mustard seed", "mustard seeds", "dijon"],
    "sugar": ["white sugar", "granulated sugar", "caster sugar", "brown sugar", "cane sugar"],
    "vinegar": ["white vinegar", "rice vinegar", "apple cider vinegar", "balsamic vinegar", "malt vinegar"],
    "wine": ["red wine", "white wine", "rice wine", "mirin", "sherry"],
    "noodle": ["noodles", "ramen", "udon", "soba"],
    "pasta": ["spaghetti", "penne", "fettuccine", "linguine", "macaroni", "lasagna"],
    "rice": ["basmati", "jasmine rice", "brown rice", "white rice", "steamed rice"],
    "chicken": ["chicken breast", "chicken thigh", "chicken thighs", "chicken wings"],
    "beef": ["ground beef", "minced beef", "beef mince", "sirloin"],
}
