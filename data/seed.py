from data.knowledge_base import FOOD_KNOWLEDGE_BASE
from data.synonyms import INGREDIENT_SYNONYMS
from models.suggestion import SuggestionKind
from services.suggestion_index import SuggestionIndex
from utils.logger import setup_logger

logger = setup_logger(__name__)


DEMO_RECIPES = [
    "Thai Peanut Noodles",
    "Margherita Pizza",
    "Chicken Tikka Masala",
    "Vegetable Stir Fry",
    "Miso Glazed Salmon",
]

POPULAR_RECIPES = [
    "Spaghetti Carbonara",
    "Butter Chicken",
    "Caesar Salad",
    "Beef Tacos",
    "Pad Thai",
    "Chicken Fried Rice",
    "Mushroom Risotto",
    "Tomato Basil Soup",
    "Grilled Cheese Sandwich",
    "Shrimp Scampi",
    "Chocolate Lava Cake",
    "Lentil Curry",
    "Greek Salad",
    "Beef Stroganoff",
    "Peanut Butter Cookies",
]


def ingredient_keywords():
    keys = set(FOOD_KNOWLEDGE_BASE.keys()) | set(INGREDIENT_SYNONYMS.keys())
    return sorted(keys)


def seed(index: SuggestionIndex) -> int:
    before = len(index)

    index.observe([{"title": t} for t in DEMO_RECIPES], source="seed")
    index.observe([{"title": t} for t in POPULAR_RECIPES], source="seed-popular")
    index.observe(
        [{"title": k, "kind": SuggestionKind.INGREDIENT} for k in ingredient_keywords()],
        source="seed-keyword",
    )

    added = len(index) - before
    logger.info(
        "Seeded suggestion index",
        extra={
            "recipes": len(DEMO_RECIPES) + len(POPULAR_RECIPES),
            "ingredients": len(ingredient_keywords()),
            "entries_added": added,
        }
    )
    return added


if __name__ == "__main__":
    idx = SuggestionIndex()
    seed(idx)
    for entry in idx.bootstrap(limit=20):
        print(f"{entry.kind.value:<10} {entry.source_tag:<14} {entry.title}")
