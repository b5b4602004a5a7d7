"""Server-rendered pages of the recipe gallery and the web server that serves them."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from flask import Flask, abort, redirect, request, send_from_directory
from markupsafe import Markup

from .api import DEFAULT_BASE_URL, ApiClient, ApiError
from .errors import AppError
from .models import Recipe
from .views import FormState, render_page, render_recipe_form

logger = logging.getLogger(__name__)

SITE_NAME = "Recipe Gallery"
DEFAULT_SITE_ADDR = "0.0.0.0:3000"
DEFAULT_STATIC_DIR = "public"

_LOADING_ERROR = Markup('<h1 class="text-center bg-red-200 p-6 rounded-lg">Error: {}</h1>')


def _error_heading(err: BaseException) -> Markup:
    return _LOADING_ERROR.format(str(err))


def render_home() -> Markup:
    """The landing page."""
    content = Markup(
        '<div class="bg-gradient-to-tl from-lime-300 to-lime-100 text-black font-mono '
        'flex flex-auto items-center justify-center">'
        '<h1 class="m-auto text-center">Cook!</h1></div>'
    )
    return render_page(SITE_NAME, content)


def render_all_recipes(api: ApiClient) -> Markup:
    """The gallery: a link to every recipe, or the error that stopped the listing."""
    try:
        recipes = api.get_all_recipes()
    except ApiError as err:
        items = _error_heading(err)
    else:
        items = Markup("").join(
            Markup(
                '<li class=""><a class="m-4 p-6 block font-medium border-gray-600 '
                'rounded-lg hover:bg-green-200 bg-green-400" href="/recipes/{}">{}</a></li>'
            ).format(str(recipe.id), recipe.title)
            for recipe in recipes
        )
    content = Markup(
        '<div class="w-full max-w-xl text-black mx-auto py-8">'
        '<ul class="flex flex-auto flex-col">{}</ul></div>'
    ).format(items)
    return render_page(f"{SITE_NAME} - Recipe Gallery", content)


def _recipe_details(recipe: Recipe, recipe_id: str) -> Markup:
    return Markup(
        "<div><strong>Title: </strong>{title}</div>"
        "<div><strong>Ingredients: </strong>{ingredients}</div>"
        "<div><strong>Steps: </strong>{body}</div>"
        '<form method="post" action="/recipes/{id}/delete" class="inline">'
        '<button type="submit" class="mt-6 mr-5 bg-green-300 hover:bg-green-200 p-2 '
        'rounded-md">Delete</button></form>'
        '<a class="bg-green-300 hover:bg-green-200 p-2 rounded-md" '
        'href="/recipes/{id}/edit">Edit</a>'
    ).format(
        title=recipe.title,
        ingredients=recipe.ingredients,
        body=recipe.body,
        id=recipe_id,
    )


def render_show_recipe(api: ApiClient, recipe_id: str) -> Markup:
    """One recipe with its comments; each part shows its own error if it fails to load."""
    recipe_id = str(recipe_id)
    try:
        recipe_part = _recipe_details(api.get_recipe_by_id(recipe_id), recipe_id)
    except ApiError as err:
        recipe_part = _error_heading(err)

    try:
        comments = api.get_comments_by_recipe_id(recipe_id)
    except ApiError as err:
        comments_part = _error_heading(err)
    else:
        comments_part = Markup("<ul>{}</ul>").format(
            Markup("").join(
                Markup(
                    "<li><div>{}</div><button>Delete?</button><button>Edit?</button></li>"
                ).format(comment.comment)
                for comment in comments
            )
        )

    content = Markup(
        '<div class="max-w-2xl rounded-xl w-full mx-auto py-8">{}{}</div>'
    ).format(recipe_part, comments_part)
    return render_page(f"{SITE_NAME} - Recipe {recipe_id}", content)


def _submitted_state(action_name: str) -> FormState:
    return FormState(
        title=request.form.get("title", ""),
        ingredients=request.form.get("ingredients", ""),
        body=request.form.get("steps", ""),
        action_name=action_name,
    )


def create_app(api: ApiClient, static_dir: str | os.PathLike[str] | None = None) -> Flask:
    """Build the web application; files in static_dir are served for unmatched paths."""
    app = Flask(__name__, static_folder=None)
    static_root = os.fspath(static_dir) if static_dir is not None else None

    @app.get("/")
    def home():
        return str(render_home())

    @app.get("/recipes")
    def all_recipes():
        logger.info("Getting recipes...")
        return str(render_all_recipes(api))

    @app.route("/recipes/add", methods=["GET", "POST"])
    def add_recipe():
        state = FormState()
        response: Recipe | BaseException | None = None
        if request.method == "POST":
            state = _submitted_state("Create")
            logger.info(
                "Title: %s, Ingredients: %s, Steps: %s",
                state.title,
                state.ingredients,
                state.body,
            )
            try:
                response = api.post_recipe(state.title, state.ingredients, state.body)
            except (ApiError, AppError) as err:
                response = err
            logger.info("%r", response)
        page = render_page(f"{SITE_NAME} - Add Recipe", render_recipe_form(state, response))
        return str(page)

    @app.get("/recipes/<recipe_id>")
    def show_recipe(recipe_id: str):
        return str(render_show_recipe(api, recipe_id))

    @app.route("/recipes/<recipe_id>/edit", methods=["GET", "POST"])
    def edit_recipe(recipe_id: str):
        response: Recipe | BaseException | None = None
        if request.method == "POST":
            state = _submitted_state("Edit")
            try:
                response = api.patch_recipe_by_id(
                    recipe_id, state.title, state.ingredients, state.body
                )
            except (ApiError, AppError) as err:
                response = err
            logger.info("%r", response)
        else:
            try:
                recipe = api.get_recipe_by_id(recipe_id)
            except ApiError as err:
                logger.info("%r", err)
                state = FormState(action_name="Edit")
            else:
                state = FormState(
                    title=recipe.title,
                    ingredients=recipe.ingredients,
                    body=recipe.body,
                    action_name="Edit",
                )
        page = render_page(f"{SITE_NAME} - Edit Recipe", render_recipe_form(state, response))
        return str(page)

    @app.post("/recipes/<recipe_id>/delete")
    def delete_recipe(recipe_id: str):
        try:
            deleted = api.delete_recipe_by_id(recipe_id)
        except ApiError as err:
            logger.info("%r", err)
            return redirect(f"/recipes/{recipe_id}")
        logger.info("%r", deleted)
        return redirect("/recipes")

    @app.get("/<path:filename>")
    def static_file(filename: str):
        if static_root is None:
            abort(404)
        return send_from_directory(static_root, filename)

    @app.errorhandler(404)
    def not_found(_error):
        return str(render_page(SITE_NAME, Markup(""))), 404

    return app


def _parse_addr(parser: argparse.ArgumentParser, addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
        parser.error(f"invalid address {addr!r}, expected HOST:PORT")
    return host, int(port)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the web server."""
    parser = argparse.ArgumentParser(description="Serve the recipe gallery web pages.")
    parser.add_argument("--addr", default=DEFAULT_SITE_ADDR, help="HOST:PORT to listen on")
    parser.add_argument("--api-url", default=DEFAULT_BASE_URL, help="backend base URL")
    parser.add_argument(
        "--static-dir", default=DEFAULT_STATIC_DIR, help="directory of static files"
    )
    args = parser.parse_args(argv)
    host, port = _parse_addr(parser, args.addr)

    logging.basicConfig(level=logging.INFO)
    app = create_app(ApiClient(args.api_url), args.static_dir)
    logger.info("listening on http://%s:%d", host, port)
    app.run(host=host, port=port)