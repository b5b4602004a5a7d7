"""HTML fragments for the gallery pages: navigation, footer and the recipe form."""

from __future__ import annotations

from dataclasses import dataclass

from markupsafe import Markup, escape

from .models import Recipe

_DISABLED = Markup(" disabled")
_NO_ATTR = Markup("")

_INPUT_CLASS = (
    "shadow rounded-lg w-full py-2 px-3 bg-gray-50 text-gray-700 border "
    "leading-tight border-gray-300 focus:ring-green-500 focus:border-green-500 "
    "disabled:bg-slate-300"
)
_TEXTAREA_CLASS = (
    "block p-2.5 w-full bg-gray-50 text-gray-700 rounded-lg leading-tight border "
    "border-gray-300 focus:ring-green-500 focus:border-green-500 disabled:bg-slate-300"
)
_BUTTON_CLASS = (
    "bg-green-500 hover:bg-green-700 text-white border-gray-300 disabled:bg-slate-500 "
    "font-bold py-2 px-4 rounded-lg focus:outline-none focus:shadow-outline"
)
_LABEL_CLASS = "block text-gray-700 text-lg font-bold mb-1"


@dataclass
class FormState:
    """The current contents of the recipe form and whether it is waiting on a request."""

    title: str = ""
    ingredients: str = ""
    body: str = ""
    disabled: bool = False
    action_name: str = "Create"

    def button_disabled(self) -> bool:
        """Creating needs every field; editing needs at least one."""
        if self.disabled:
            return True
        fields = (self.title, self.ingredients, self.body)
        if self.action_name == "Create":
            return not all(fields)
        return not any(fields)


def render_top_nav_bar() -> Markup:
    """The navigation bar shown at the top of every page."""
    return Markup(
        '<nav class="bg-green-600 text-white">'
        '<div class="max-w-screen-xl flex flex-wrap items-center justify-between mx-auto p-6">'
        '<div><a class="font-medium" href="/">Recipe Gallery</a></div>'
        '<div class="w-auto"><ul class="flex">'
        '<li><a class="pr-4 hover:text-green-200" href="/recipes">Gallery</a></li>'
        '<li><a class="pr-4 hover:text-green-200" href="/recipes/add">Add Recipe</a></li>'
        "</ul></div></div></nav>"
    )


def render_footer() -> Markup:
    """The footer shown at the bottom of every page."""
    return Markup(
        '<footer class="bg-emerald-600 mt-auto">'
        '<div class="w-full max-w-screen-xl mx-auto p-4 md:py-8 text-center">'
        '<ul class="flex flex-wrap items-center mt-3 sm:mt-0 text-sm font-medium '
        'text-white justify-center">'
        '<li><a href="/" class="mr-4 hover:underline md:mr-6 ">Home</a></li>'
        "</ul></div></footer>"
    )


def render_response_message(response: Recipe | BaseException | None) -> Markup:
    """Report the outcome of a form submission.

    A recipe links to its page, an exception is shown as an error, and
    None (nothing submitted yet) renders nothing.
    """
    if response is None:
        return Markup("")
    if isinstance(response, BaseException):
        return Markup(
            '<p class="text-red-500"><strong>Error: </strong>{}</p>'
        ).format(str(response))
    recipe_id = str(response.id)
    return Markup(
        '<a class="text-green-500 hover:underline" href="/recipes/{}">'
        "<strong>Success! Recipe ID: </strong>{}</a>"
    ).format(recipe_id, recipe_id)


def render_recipe_form(
    state: FormState, response: Recipe | BaseException | None = None
) -> Markup:
    """The form that creates or edits a recipe, prefilled from the state."""
    field_disabled = _DISABLED if state.disabled else _NO_ATTR
    button_disabled = _DISABLED if state.button_disabled() else _NO_ATTR
    return Markup(
        '<div class="w-full max-w-lg text-black mx-auto py-8">'
        '<form method="post" class="bg-white shadow-md rounded px-8 pt-6 pb-5 mb-2">'
        '<div class="w-full text-black text-2xl pb-4 text-center">'
        "<h1>{action} recipe</h1></div>"
        '<div class="mb-5">'
        '<label for="title" class="{label}">Title</label>'
        '<input type="text" id="title" name="title" placeholder="Title" required '
        'class="{input_class}" value="{title}"{field_disabled}>'
        "</div>"
        '<div class="mb-5">'
        '<label for="ingredients" class="{label}">Ingredients</label>'
        '<textarea id="ingredients" name="ingredients" rows="4" cols="50" required '
        'class="{textarea_class}" placeholder="Write your ingredients here..."'
        "{field_disabled}>{ingredients}</textarea>"
        "</div>"
        '<div class="mb-5">'
        '<label for="steps" class="{label}">Steps</label>'
        '<textarea id="steps" name="steps" rows="4" required cols="50" '
        'class="{textarea_class}" placeholder="Write your steps here..."'
        "{field_disabled}>{body}</textarea>"
        "</div>"
        '<div class="text-right">'
        '<button type="submit" class="{button_class}"{button_disabled}>'
        "{action} Recipe</button>"
        "</div>"
        '<div class="pt-2">{message}</div>'
        "</form></div>"
    ).format(
        action=state.action_name,
        label=_LABEL_CLASS,
        input_class=_INPUT_CLASS,
        textarea_class=_TEXTAREA_CLASS,
        button_class=_BUTTON_CLASS,
        title=state.title,
        ingredients=state.ingredients,
        body=state.body,
        field_disabled=field_disabled,
        button_disabled=button_disabled,
        message=render_response_message(response),
    )


def render_page(title: str, content: str | Markup) -> Markup:
    """A whole HTML document around the given content.

    Plain strings are escaped; Markup is inserted as it is.
    """
    return Markup(
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        "<title>{title}</title>"
        '<link id="leptos" rel="stylesheet" href="/pkg/recipe-gallery.css">'
        '<link rel="shortcut icon" type="image/ico" href="/favicon.ico">'
        "</head><body>"
        '<div class="flex flex-col min-h-screen bg-green-50">'
        "{nav}"
        '<main class="flex flex-auto">{content}</main>'
        "{footer}"
        "</div></body></html>"
    ).format(
        title=title,
        nav=render_top_nav_bar(),
        content=escape(content),
        footer=render_footer(),
    )