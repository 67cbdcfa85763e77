import pytest
import requests

from services.providers.exceptions import ProviderError
from services.providers.foodoscope_client import (
    FLAVOR_LOOKUP_PATH,
    RECIPE_SEARCH_PATH,
    FoodoscopeClient,
    parse_tag_list,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.headers = {}
        self.responses = responses or {}
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        for path, response in self.responses.items():
            if url.endswith(path):
                return response
        return FakeResponse(404)

    def close(self):
        self.closed = True


def make_client(session):
    return FoodoscopeClient(base_url="https://provider.test/", api_key="secret", timeout=2, session=session)


class TestParseTagList:
    def test_at_separated_string(self):
        assert parse_tag_list("Sweet@sour@ fruity @") == {"sweet", "sour", "fruity"}

    def test_list_and_empty(self):
        assert parse_tag_list(["Bitter", "Green"]) == {"bitter", "green"}
        assert parse_tag_list(None) == set()
        assert parse_tag_list(42) == set()


class TestFoodoscopeClient:
    def test_sets_auth_header_and_strips_base_url(self):
        session = FakeSession()
        client = make_client(session)

        assert session.headers["Authorization"] == "Bearer secret"
        assert client.base_url == "https://provider.test"

    def test_search_parses_rows(self):
        session = FakeSession({RECIPE_SEARCH_PATH: FakeResponse(payload={
            "success": True,
            "data": [
                {"Recipe_id": 101, "Recipe_title": "Thai Peanut Noodles"},
                {"_id": "abc", "Recipe_title": "Thai Basil Noodles"},
                {"Recipe_id": 102},
            ],
        })})

        results = make_client(session).search("thai noodles")

        assert [(r.id, r.title) for r in results] == [("101", "Thai Peanut Noodles"), ("abc", "Thai Basil Noodles")]
        url, params, timeout = session.calls[0]
        assert params == {"title": "thai noodles"}
        assert timeout == 2

    def test_unsuccessful_search_is_empty(self):
        session = FakeSession({RECIPE_SEARCH_PATH: FakeResponse(payload={"success": False})})
        assert make_client(session).search("anything") == []

    def test_details(self):
        session = FakeSession({"/search-recipe/7": FakeResponse(payload={
            "recipe": {"Recipe_id": "7", "Recipe_title": "Miso Soup"},
            "ingredients": [
                {"ingredient": "miso paste"},
                {"ingredient_Phrase": "tofu, cubed"},
                {"ingredient": "  "},
                "scallion",
            ],
        })})

        details = make_client(session).get_details("7")

        assert details.title == "Miso Soup"
        assert details.ingredients == ["miso paste", "tofu, cubed", "scallion"]

    def test_details_not_found(self):
        assert make_client(FakeSession()).get_details("missing") is None

    def test_lookup(self):
        session = FakeSession({FLAVOR_LOOKUP_PATH: FakeResponse(payload={"content": [{
            "common_name": "Sugar",
            "flavor_profile": "sweet@caramel",
            "functional_groups": "hydroxyl",
            "super_sweet": "true",
            "bitter": False,
        }]})})

        record = make_client(session).lookup("sugar")

        assert record.canonical_name == "sugar"
        assert record.found_name == "Sugar"
        assert record.flavor_profile == {"sweet", "caramel"}
        assert record.super_sweet
        assert not record.bitter
        assert session.calls[0][1] == {"common_name": "sugar"}

    def test_lookup_without_content_is_not_found(self):
        session = FakeSession({FLAVOR_LOOKUP_PATH: FakeResponse(payload={"content": []})})
        assert make_client(session).lookup("unobtainium") is None
        assert make_client(FakeSession()).lookup("unobtainium") is None

    @pytest.mark.parametrize("session", [
        FakeSession(error=requests.ConnectionError("refused")),
        FakeSession({FLAVOR_LOOKUP_PATH: FakeResponse(503)}),
        FakeSession({FLAVOR_LOOKUP_PATH: FakeResponse(invalid_json=True)}),
    ])
    def test_failures_raise_provider_error(self, session):
        with pytest.raises(ProviderError) as exc_info:
            make_client(session).lookup("sugar")
        assert exc_info.value.provider == "foodoscope"

    def test_http_error_keeps_status(self):
        session = FakeSession({RECIPE_SEARCH_PATH: FakeResponse(429)})
        with pytest.raises(ProviderError) as exc_info:
            make_client(session).search("pizza")
        assert exc_info.value.status_code == 429

    def test_close(self):
        session = FakeSession()
        make_client(session).close()
        assert session.closed
