"""SQLite-backed storage for recipes and their comments."""

from __future__ import annotations

import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from .errors import (
    DatabaseError,
    ForeignKeyViolationError,
    NotFoundError,
    QueryBuilderError,
)
from .models import Comment, PatchComment, PatchRecipe, Recipe

_SCHEMA = """
CREATE TABLE IF NOT EXISTS recipes (
    id TEXT PRIMARY KEY NOT NULL,
    title TEXT NOT NULL,
    ingredients TEXT NOT NULL,
    body TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS comments (
    id TEXT PRIMARY KEY NOT NULL,
    recipe_id TEXT NOT NULL REFERENCES recipes (id),
    comment TEXT NOT NULL
);
"""


def _recipe(row: sqlite3.Row) -> Recipe:
    return Recipe(
        id=UUID(row["id"]),
        title=row["title"],
        ingredients=row["ingredients"],
        body=row["body"],
    )


def _comment(row: sqlite3.Row) -> Comment:
    return Comment(
        id=UUID(row["id"]), recipe_id=UUID(row["recipe_id"]), comment=row["comment"]
    )


class RecipeStore:
    """Create, read, update and delete recipes and comments."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(os.fspath(path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.executescript(_SCHEMA)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "RecipeStore":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.IntegrityError as exc:
                if "FOREIGN KEY" in str(exc):
                    raise ForeignKeyViolationError(str(exc)) from exc
                raise DatabaseError(str(exc)) from exc
            except sqlite3.Error as exc:
                raise DatabaseError(str(exc)) from exc

    def create_recipe(self, recipe: Recipe) -> Recipe:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO recipes (id, title, ingredients, body) VALUES (?, ?, ?, ?)",
                (str(recipe.id), recipe.title, recipe.ingredients, recipe.body),
            )
            row = conn.execute(
                "SELECT * FROM recipes WHERE id = ?", (str(recipe.id),)
            ).fetchone()
        return _recipe(row)

    def read_all_recipes(self) -> list[Recipe]:
        with self._transaction() as conn:
            rows = conn.execute("SELECT * FROM recipes ORDER BY rowid").fetchall()
        return [_recipe(row) for row in rows]

    def read_one_recipe(self, recipe_id: UUID) -> Recipe:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM recipes WHERE id = ?", (str(recipe_id),)
            ).fetchone()
        if row is None:
            raise NotFoundError()
        return _recipe(row)

    def update_recipe(self, recipe_id: UUID, patch: PatchRecipe) -> Recipe:
        changes = patch.changes()
        if not changes:
            raise QueryBuilderError()
        assignments = ", ".join(f"{column} = ?" for column in changes)
        with self._transaction() as conn:
            cursor = conn.execute(
                f"UPDATE recipes SET {assignments} WHERE id = ?",
                (*changes.values(), str(recipe_id)),
            )
            if cursor.rowcount == 0:
                raise NotFoundError()
            row = conn.execute(
                "SELECT * FROM recipes WHERE id = ?", (str(recipe_id),)
            ).fetchone()
        return _recipe(row)

    def delete_recipe(self, recipe_id: UUID) -> Recipe:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM recipes WHERE id = ?", (str(recipe_id),)
            ).fetchone()
            if row is None:
                raise NotFoundError()
            conn.execute("DELETE FROM recipes WHERE id = ?", (str(recipe_id),))
        return _recipe(row)

    def create_comment(self, comment: Comment) -> Comment:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO comments (id, recipe_id, comment) VALUES (?, ?, ?)",
                (str(comment.id), str(comment.recipe_id), comment.comment),
            )
            row = conn.execute(
                "SELECT * FROM comments WHERE id = ?", (str(comment.id),)
            ).fetchone()
        return _comment(row)

    def read_all_comments(self) -> list[Comment]:
        with self._transaction() as conn:
            rows = conn.execute("SELECT * FROM comments ORDER BY rowid").fetchall()
        return [_comment(row) for row in rows]

    def update_comment(self, comment_id: UUID, patch: PatchComment) -> Comment:
        changes = patch.changes()
        if not changes:
            raise QueryBuilderError()
        assignments = ", ".join(f"{column} = ?" for column in changes)
        with self._transaction() as conn:
            cursor = conn.execute(
                f"UPDATE comments SET {assignments} WHERE id = ?",
                (*changes.values(), str(comment_id)),
            )
            if cursor.rowcount == 0:
                raise NotFoundError()
            row = conn.execute(
                "SELECT * FROM comments WHERE id = ?", (str(comment_id),)
            ).fetchone()
        return _comment(row)

    def delete_comment(self, comment_id: UUID) -> Comment:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM comments WHERE id = ?", (str(comment_id),)
            ).fetchone()
            if row is None:
                raise NotFoundError()
            conn.execute("DELETE FROM comments WHERE id = ?", (str(comment_id),))
        return _comment(row)