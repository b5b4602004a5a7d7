# recipegallery

A small recipe gallery. It keeps recipes (a title, the ingredients and the
steps) and the comments left on them, talks to a recipe JSON API over HTTP,
and shows recipes in a plain server-rendered web site where you can browse,
add, edit and delete them.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the web site

```
recipegallery
```

This starts the Flask web frontend. Options:

| Option         | Default               | Meaning                                      |
|----------------|-----------------------|----------------------------------------------|
| `--addr`       | `0.0.0.0:3000`        | `HOST:PORT` to listen on                     |
| `--api-url`    | `http://0.0.0.0:7979` | base URL of the recipe JSON API              |
| `--static-dir` | `public`              | directory whose files are served as is       |

The frontend reads and writes every recipe through the JSON API at
`--api-url`. It serves these pages:

| Path                           | Page                                          |
|--------------------------------|-----------------------------------------------|
| `GET /`                        | home page                                     |
| `GET /recipes`                 | links to all recipes                          |
| `GET, POST /recipes/add`       | form to add a recipe                          |
| `GET /recipes/<id>`            | one recipe and its comments                   |
| `GET, POST /recipes/<id>/edit` | form to edit a recipe, prefilled from the API |
| `POST /recipes/<id>/delete`    | deletes the recipe, then redirects            |

A successful delete redirects to `/recipes`; a failed one back to the
recipe's page. When editing, only fields that are not empty are sent. Any
other path is looked up as a file in the static directory; when there is no
such file the response is an empty page with status 404.

## The modules

- `recipegallery.models` – the records `Recipe` and `Comment` and the request
  bodies `PostRecipe`, `PatchRecipe`, `PostComment` and `PatchComment`. Each
  has `from_dict()` (raising `JsonBodyError` on a malformed body) and
  `validate()` (raising `ValidationErrors`). The limits: a title and the
  ingredients must be at least 2 characters; a new recipe's body at least 2
  characters, a patched body and a comment at least 1. `PostRecipe.into_recipe()`
  and `PostComment.into_comment()` give the record a fresh random id;
  `PatchRecipe.changes()` and `PatchComment.changes()` return the fields that
  are set.
- `recipegallery.database` – `RecipeStore`, a SQLite store with
  `create_recipe`, `read_all_recipes`, `read_one_recipe`, `update_recipe`,
  `delete_recipe`, `create_comment`, `read_all_comments`, `update_comment` and
  `delete_comment`. Missing rows raise `NotFoundError`, a patch with nothing
  to change raises `QueryBuilderError`, and foreign keys are enforced, so a
  comment on a missing recipe, or deleting a recipe that still has comments,
  raises `ForeignKeyViolationError`. It is a context manager:

  ```python
  from recipegallery.database import RecipeStore
  from recipegallery.models import PostRecipe

  with RecipeStore("recipes.db") as store:
      recipe = store.create_recipe(
          PostRecipe(title="Pancakes", ingredients="flour, eggs, milk",
                     body="Mix and fry.").validate().into_recipe()
      )
      print(store.read_one_recipe(recipe.id).title)
  ```

- `recipegallery.errors` – `AppError` and its subclasses (`JsonBodyError`,
  `ValidationErrors`, `DatabaseError`, `NotFoundError`, `QueryBuilderError`,
  `ForeignKeyViolationError`, `BodyMiddlewareError`, `OtherError`).
  `AppError.to_response()` returns the status code and message text: 400 for
  a bad JSON body or an unreadable body, 422 for validation failures and
  foreign-key violations, 404 for a missing record, 200 for an empty patch,
  500 otherwise. `PathError.to_response()` returns a status and a JSON body
  with `message` and `location`. `parse_json_body()` and `parse_uuid_path()`
  read request input and raise these errors; `wrap_other()` wraps any
  exception as an `OtherError`.
- `recipegallery.middleware` – `PrintBodyMiddleware`, a WSGI middleware that
  buffers request and response bodies and logs each one that is valid UTF-8;
  `buffer_and_log()` does the buffering and logging for one body.
- `recipegallery.api` – `ApiClient`, an HTTP client for the recipe JSON API
  with `post_recipe`, `get_all_recipes`, `get_recipe_by_id`,
  `patch_recipe_by_id`, `get_comments_by_recipe_id`, `delete_comment_by_id`
  and `delete_recipe_by_id`. Network failures and unexpected bodies raise
  `ApiError`; `post_recipe` validates first and raises `ValidationErrors`
  without sending anything. Note that `delete_comment_by_id` sends a `GET`
  request to the comment's URL.
- `recipegallery.views` – HTML fragments: `render_top_nav_bar`,
  `render_footer`, `render_recipe_form`, `render_response_message` and
  `render_page`, with `FormState` holding the form's contents. All values
  are HTML-escaped.
- `recipegallery.frontend` – `render_home`, `render_all_recipes`,
  `render_show_recipe`, `create_app(api, static_dir)` which builds the Flask
  application, and `main()`, the `recipegallery` command.

## What it does not do

- There is no JSON API server in the package. `RecipeStore` holds the data
  and `ApiClient` speaks to the API, but nothing here serves the `/api/recipe`
  endpoints over HTTP; the web site needs such a server running at
  `--api-url`.
- The web pages list a recipe's comments but offer no way to add, edit or
  delete them; the comment buttons on a recipe's page do nothing.