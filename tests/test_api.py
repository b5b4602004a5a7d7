import json
from uuid import uuid4

import pytest
import responses

from recipegallery.api import DEFAULT_BASE_URL, ApiClient, ApiError
from recipegallery.errors import ValidationErrors
from recipegallery.models import Comment, Recipe

BASE = DEFAULT_BASE_URL


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def _recipe(**overrides):
    recipe = Recipe(id=uuid4(), title="Soup", ingredients="water, salt", body="boil")
    data = recipe.to_dict()
    data.update(overrides)
    return recipe, data


def test_post_recipe_sends_body_and_returns_recipe(mocked):
    recipe, data = _recipe()
    mocked.add(responses.POST, f"{BASE}/api/recipe/new", json=data)
    result = ApiClient().post_recipe("Soup", "water, salt", "boil")
    assert result == recipe
    assert json.loads(mocked.calls[0].request.body) == {
        "title": "Soup",
        "ingredients": "water, salt",
        "body": "boil",
    }


def test_post_recipe_validates_before_sending(mocked):
    with pytest.raises(ValidationErrors) as info:
        ApiClient().post_recipe("a", "water, salt", "boil")
    assert "title" in info.value.errors
    assert len(mocked.calls) == 0


def test_get_all_recipes(mocked):
    first, first_data = _recipe()
    second, second_data = _recipe(title="Bread")
    mocked.add(responses.GET, f"{BASE}/api/recipe", json=[first_data, second_data])
    result = ApiClient().get_all_recipes()
    assert [r.id for r in result] == [first.id, second.id]
    assert result[1].title == "Bread"


def test_get_all_recipes_non_json_raises(mocked):
    mocked.add(responses.GET, f"{BASE}/api/recipe", body="Record not found", status=404)
    with pytest.raises(ApiError):
        ApiClient().get_all_recipes()


def test_get_recipe_by_id_uses_id_in_path(mocked):
    recipe, data = _recipe()
    mocked.add(responses.GET, f"{BASE}/api/recipe/{recipe.id}", json=data)
    assert ApiClient().get_recipe_by_id(str(recipe.id)) == recipe


def test_get_recipe_with_wrong_shape_raises(mocked):
    recipe, data = _recipe()
    del data["title"]
    mocked.add(responses.GET, f"{BASE}/api/recipe/{recipe.id}", json=data)
    with pytest.raises(ApiError):
        ApiClient().get_recipe_by_id(recipe.id)


def test_patch_sends_only_non_empty_fields(mocked):
    recipe, data = _recipe(title="New title")
    mocked.add(responses.PATCH, f"{BASE}/api/recipe/{recipe.id}", json=data)
    result = ApiClient().patch_recipe_by_id(recipe.id, "New title", "", "")
    assert result.title == "New title"
    assert json.loads(mocked.calls[0].request.body) == {"title": "New title"}


def test_get_comments_unwraps_results(mocked):
    recipe_id = uuid4()
    comment = Comment(id=uuid4(), recipe_id=recipe_id, comment="tasty")
    mocked.add(
        responses.GET,
        f"{BASE}/api/recipe/{recipe_id}/comments",
        json={"results": [comment.to_dict()]},
    )
    assert ApiClient().get_comments_by_recipe_id(recipe_id) == [comment]


def test_get_comments_without_results_raises(mocked):
    recipe_id = uuid4()
    mocked.add(responses.GET, f"{BASE}/api/recipe/{recipe_id}/comments", json=[])
    with pytest.raises(ApiError):
        ApiClient().get_comments_by_recipe_id(recipe_id)


def test_delete_comment_requests_comment_path(mocked):
    recipe_id = uuid4()
    comment = Comment(id=uuid4(), recipe_id=recipe_id, comment="tasty")
    mocked.add(
        responses.GET,
        f"{BASE}/api/recipe/{recipe_id}/comments/{comment.id}",
        json=comment.to_dict(),
    )
    assert ApiClient().delete_comment_by_id(recipe_id, comment.id) == comment
    assert mocked.calls[0].request.method == "GET"


def test_delete_recipe_uses_delete(mocked):
    recipe, data = _recipe()
    mocked.add(responses.DELETE, f"{BASE}/api/recipe/{recipe.id}", json=data)
    assert ApiClient().delete_recipe_by_id(recipe.id) == recipe
    assert mocked.calls[0].request.method == "DELETE"


def test_connection_failure_raises_api_error(mocked):
    with pytest.raises(ApiError):
        ApiClient().get_all_recipes()


def test_custom_base_url_with_trailing_slash(mocked):
    recipe, data = _recipe()
    mocked.add(responses.GET, "http://localhost:8000/api/recipe", json=[data])
    client = ApiClient("http://localhost:8000/")
    assert client.get_all_recipes() == [recipe]