"""Recipe and comment records and the request bodies that create or change them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from uuid import UUID, uuid4

from .errors import JsonBodyError, ValidationErrors

_DATA_ERROR = "Failed to deserialize the JSON body into the target type"

_TITLE_MESSAGE = "must be at least 2 characters"
_INGREDIENTS_MESSAGE = "must have at least 1 ingredient"
_BODY_MESSAGE = "must have a body"


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise JsonBodyError(f"{_DATA_ERROR}: invalid type, expected a JSON object")
    return data


def _required_str(data: Mapping[str, Any], name: str) -> str:
    if name not in data:
        raise JsonBodyError(f"{_DATA_ERROR}: missing field `{name}`")
    value = data[name]
    if not isinstance(value, str):
        raise JsonBodyError(
            f"{_DATA_ERROR}: invalid type for field `{name}`, expected a string"
        )
    return value


def _optional_str(data: Mapping[str, Any], name: str) -> str | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise JsonBodyError(
            f"{_DATA_ERROR}: invalid type for field `{name}`, expected a string"
        )
    return value


def _required_uuid(data: Mapping[str, Any], name: str) -> UUID:
    text = _required_str(data, name)
    try:
        return UUID(text)
    except ValueError as exc:
        raise JsonBodyError(f"{_DATA_ERROR}: invalid UUID for field `{name}`") from exc


def _check_length(
    errors: ValidationErrors, field: str, value: str | None, minimum: int, message: str
) -> None:
    if value is not None and len(value) < minimum:
        errors.add(field, message)


def _raise_if_any(errors: ValidationErrors) -> None:
    if errors.errors:
        raise errors


@dataclass(frozen=True)
class Recipe:
    """A stored recipe."""

    id: UUID
    title: str
    ingredients: str
    body: str

    @classmethod
    def from_dict(cls, data: Any) -> "Recipe":
        data = _mapping(data)
        return cls(
            id=_required_uuid(data, "id"),
            title=_required_str(data, "title"),
            ingredients=_required_str(data, "ingredients"),
            body=_required_str(data, "body"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": str(self.id),
            "title": self.title,
            "ingredients": self.ingredients,
            "body": self.body,
        }


@dataclass(frozen=True)
class Comment:
    """A stored comment on a recipe."""

    id: UUID
    recipe_id: UUID
    comment: str

    @classmethod
    def from_dict(cls, data: Any) -> "Comment":
        data = _mapping(data)
        return cls(
            id=_required_uuid(data, "id"),
            recipe_id=_required_uuid(data, "recipe_id"),
            comment=_required_str(data, "comment"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": str(self.id),
            "recipe_id": str(self.recipe_id),
            "comment": self.comment,
        }


@dataclass
class PostRecipe:
    """Body of a request that creates a recipe."""

    title: str
    ingredients: str
    body: str

    @classmethod
    def from_dict(cls, data: Any) -> "PostRecipe":
        data = _mapping(data)
        return cls(
            title=_required_str(data, "title"),
            ingredients=_required_str(data, "ingredients"),
            body=_required_str(data, "body"),
        )

    def validate(self) -> "PostRecipe":
        """Raise ValidationErrors if any field is too short; return self otherwise."""
        errors = ValidationErrors()
        _check_length(errors, "title", self.title, 2, _TITLE_MESSAGE)
        _check_length(errors, "ingredients", self.ingredients, 2, _INGREDIENTS_MESSAGE)
        _check_length(errors, "body", self.body, 2, _BODY_MESSAGE)
        _raise_if_any(errors)
        return self

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "ingredients": self.ingredients, "body": self.body}

    def into_recipe(self) -> Recipe:
        """Make a new recipe with a fresh random id."""
        return Recipe(
            id=uuid4(), title=self.title, ingredients=self.ingredients, body=self.body
        )


@dataclass
class PatchRecipe:
    """Body of a request that changes some fields of a recipe."""

    title: str | None = None
    ingredients: str | None = None
    body: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "PatchRecipe":
        data = _mapping(data)
        return cls(
            title=_optional_str(data, "title"),
            ingredients=_optional_str(data, "ingredients"),
            body=_optional_str(data, "body"),
        )

    def validate(self) -> "PatchRecipe":
        """Raise ValidationErrors if a given field is too short; return self otherwise."""
        errors = ValidationErrors()
        _check_length(errors, "title", self.title, 2, _TITLE_MESSAGE)
        _check_length(errors, "ingredients", self.ingredients, 2, _INGREDIENTS_MESSAGE)
        _check_length(errors, "body", self.body, 1, _BODY_MESSAGE)
        _raise_if_any(errors)
        return self

    def changes(self) -> dict[str, str]:
        """The columns this patch sets, with their new values."""
        fields = {"title": self.title, "ingredients": self.ingredients, "body": self.body}
        return {name: value for name, value in fields.items() if value is not None}


@dataclass
class PostComment:
    """Body of a request that creates a comment."""

    recipe_id: UUID
    comment: str

    @classmethod
    def from_dict(cls, data: Any) -> "PostComment":
        data = _mapping(data)
        return cls(
            recipe_id=_required_uuid(data, "recipe_id"),
            comment=_required_str(data, "comment"),
        )

    def validate(self) -> "PostComment":
        errors = ValidationErrors()
        _check_length(errors, "comment", self.comment, 1, _BODY_MESSAGE)
        _raise_if_any(errors)
        return self

    def into_comment(self) -> Comment:
        """Make a new comment with a fresh random id."""
        return Comment(id=uuid4(), recipe_id=self.recipe_id, comment=self.comment)


@dataclass
class PatchComment:
    """Body of a request that changes a comment."""

    id: UUID
    comment: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "PatchComment":
        data = _mapping(data)
        return cls(id=_required_uuid(data, "id"), comment=_optional_str(data, "comment"))

    def validate(self) -> "PatchComment":
        errors = ValidationErrors()
        _check_length(errors, "comment", self.comment, 1, _BODY_MESSAGE)
        _raise_if_any(errors)
        return self

    def changes(self) -> dict[str, str]:
        """The columns this patch sets; the primary key is never among them."""
        return {} if self.comment is None else {"comment": self.comment}