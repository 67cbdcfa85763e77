from services.providers.exceptions import ProviderError
from services.providers.protocol import SearchProvider, FlavorProvider, RecipeDetailProvider
from services.providers.foodoscope_client import FoodoscopeClient, parse_tag_list

__all__ = [
    "ProviderError",
    "SearchProvider",
    "FlavorProvider",
    "RecipeDetailProvider",
    "FoodoscopeClient",
    "parse_tag_list",
]
