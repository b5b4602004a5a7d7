"""HTTP client for the recipe gallery backend."""

from __future__ import annotations

from typing import Any, Callable, TypeVar
from uuid import UUID

import requests

from .errors import JsonBodyError
from .models import Comment, PostRecipe, Recipe

DEFAULT_BASE_URL = "http://0.0.0.0:7979"

T = TypeVar("T")


class ApiError(Exception):
    """A request to the backend failed or returned an unexpected body."""


def _decode(build: Callable[[Any], T], data: Any) -> T:
    try:
        return build(data)
    except JsonBodyError as exc:
        raise ApiError(str(exc)) from exc


def _decode_list(build: Callable[[Any], T], data: Any) -> list[T]:
    if not isinstance(data, list):
        raise ApiError("error decoding response body: expected a JSON array")
    return [_decode(build, item) for item in data]


class ApiClient:
    """Calls the backend's recipe and comment endpoints."""

    timeout = 10.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", json=payload, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise ApiError(str(exc)) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"error decoding response body: {exc}") from exc

    def post_recipe(self, title: str, ingredients: str, steps: str) -> Recipe:
        """Validate and create a recipe; raises ValidationErrors before sending."""
        recipe = PostRecipe(title=title, ingredients=ingredients, body=steps).validate()
        data = self._request("POST", "/api/recipe/new", recipe.to_dict())
        return _decode(Recipe.from_dict, data)

    def get_all_recipes(self) -> list[Recipe]:
        return _decode_list(Recipe.from_dict, self._request("GET", "/api/recipe"))

    def get_recipe_by_id(self, recipe_id: str | UUID) -> Recipe:
        data = self._request("GET", f"/api/recipe/{recipe_id}")
        return _decode(Recipe.from_dict, data)

    def patch_recipe_by_id(
        self, recipe_id: str | UUID, title: str, ingredients: str, steps: str
    ) -> Recipe:
        """Send only the fields that are not empty."""
        fields = {"title": title, "ingredients": ingredients, "body": steps}
        changes = {name: value for name, value in fields.items() if value}
        data = self._request("PATCH", f"/api/recipe/{recipe_id}", changes)
        return _decode(Recipe.from_dict, data)

    def get_comments_by_recipe_id(self, recipe_id: str | UUID) -> list[Comment]:
        data = self._request("GET", f"/api/recipe/{recipe_id}/comments")
        if not isinstance(data, dict) or "results" not in data:
            raise ApiError("error decoding response body: missing field `results`")
        return _decode_list(Comment.from_dict, data["results"])

    def delete_comment_by_id(
        self, recipe_id: str | UUID, comment_id: str | UUID
    ) -> Comment:
        data = self._request("GET", f"/api/recipe/{recipe_id}/comments/{comment_id}")
        return _decode(Comment.from_dict, data)

    def delete_recipe_by_id(self, recipe_id: str | UUID) -> Recipe:
        data = self._request("DELETE", f"/api/recipe/{recipe_id}")
        return _decode(Recipe.from_dict, data)