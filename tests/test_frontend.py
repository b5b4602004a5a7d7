import json
from uuid import uuid4

import pytest
import responses

from recipegallery.api import ApiClient
from recipegallery.frontend import (
    create_app,
    main,
    render_all_recipes,
    render_home,
    render_show_recipe,
)

BASE = "http://api.test"


def _recipe(title="Pancakes", ingredients="flour, eggs", body="mix and fry"):
    return {"id": str(uuid4()), "title": title, "ingredients": ingredients, "body": body}


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def api():
    return ApiClient(base_url=BASE)


@pytest.fixture
def client(api, tmp_path):
    return create_app(api, tmp_path).test_client()


def test_render_home_has_greeting_and_title():
    page = str(render_home())
    assert "Cook!" in page
    assert "<title>Recipe Gallery</title>" in page


def test_render_all_recipes_links_every_recipe(rsps, api):
    first, second = _recipe("Soup"), _recipe("<b>Stew</b>")
    rsps.add(responses.GET, f"{BASE}/api/recipe", json=[first, second])
    page = str(render_all_recipes(api))
    assert f'href="/recipes/{first["id"]}"' in page
    assert f'href="/recipes/{second["id"]}"' in page
    assert "&lt;b&gt;Stew&lt;/b&gt;" in page
    assert page.index("Soup") < page.index("Stew")


def test_render_all_recipes_shows_error(rsps, api):
    rsps.add(responses.GET, f"{BASE}/api/recipe", body="not json", status=500)
    page = str(render_all_recipes(api))
    assert "Error: " in page
    assert "<li" not in page


def test_render_show_recipe_with_comments(rsps, api):
    recipe = _recipe()
    rid = recipe["id"]
    comment = {"id": str(uuid4()), "recipe_id": rid, "comment": "Tasty"}
    rsps.add(responses.GET, f"{BASE}/api/recipe/{rid}", json=recipe)
    rsps.add(responses.GET, f"{BASE}/api/recipe/{rid}/comments", json={"results": [comment]})
    page = str(render_show_recipe(api, rid))
    assert f"<title>Recipe Gallery - Recipe {rid}</title>" in page
    assert "Title: </strong>Pancakes" in page
    assert "Steps: </strong>mix and fry" in page
    assert f'href="/recipes/{rid}/edit"' in page
    assert "<div>Tasty</div>" in page


def test_render_show_recipe_errors_are_independent(rsps, api):
    recipe = _recipe()
    rid = recipe["id"]
    rsps.add(responses.GET, f"{BASE}/api/recipe/{rid}", json=recipe)
    rsps.add(responses.GET, f"{BASE}/api/recipe/{rid}/comments", json={"other": []})
    page = str(render_show_recipe(api, rid))
    assert "Title: </strong>Pancakes" in page
    assert "missing field `results`" in page


def test_home_route(client):
    reply = client.get("/")
    assert reply.status_code == 200
    assert "Cook!" in reply.get_data(as_text=True)


def test_add_form_is_empty_with_create_action(client):
    page = client.get("/recipes/add").get_data(as_text=True)
    assert "Create recipe" in page
    assert 'value=""' in page


def test_add_invalid_recipe_reports_validation_without_request(rsps, client):
    reply = client.post("/recipes/add", data={"title": "a", "ingredients": "bb", "steps": "cc"})
    page = reply.get_data(as_text=True)
    assert "must be at least 2 characters" in page
    assert len(rsps.calls) == 0


def test_add_valid_recipe_posts_and_links(rsps, client):
    recipe = _recipe()
    rsps.add(responses.POST, f"{BASE}/api/recipe/new", json=recipe)
    page = client.post(
        "/recipes/add",
        data={"title": "Pancakes", "ingredients": "flour, eggs", "steps": "mix and fry"},
    ).get_data(as_text=True)
    assert f"Success! Recipe ID: </strong>{recipe['id']}" in page
    sent = json.loads(rsps.calls[0].request.body)
    assert sent == {"title": "Pancakes", "ingredients": "flour, eggs", "body": "mix and fry"}


def test_edit_form_is_prefilled(rsps, client):
    recipe = _recipe()
    rsps.add(responses.GET, f"{BASE}/api/recipe/{recipe['id']}", json=recipe)
    page = client.get(f"/recipes/{recipe['id']}/edit").get_data(as_text=True)
    assert "Edit recipe" in page
    assert 'value="Pancakes"' in page
    assert ">mix and fry</textarea>" in page


def test_edit_sends_only_filled_fields(rsps, client):
    recipe = _recipe(title="New title")
    rid = recipe["id"]
    rsps.add(responses.PATCH, f"{BASE}/api/recipe/{rid}", json=recipe)
    page = client.post(
        f"/recipes/{rid}/edit", data={"title": "New title", "ingredients": "", "steps": ""}
    ).get_data(as_text=True)
    assert json.loads(rsps.calls[0].request.body) == {"title": "New title"}
    assert f"Success! Recipe ID: </strong>{rid}" in page


def test_delete_success_redirects_to_gallery(rsps, client):
    recipe = _recipe()
    rsps.add(responses.DELETE, f"{BASE}/api/recipe/{recipe['id']}", json=recipe)
    reply = client.post(f"/recipes/{recipe['id']}/delete")
    assert reply.status_code == 302
    assert reply.headers["Location"].endswith("/recipes")


def test_delete_failure_returns_to_recipe(rsps, client):
    rid = str(uuid4())
    rsps.add(responses.DELETE, f"{BASE}/api/recipe/{rid}", body="oops", status=500)
    reply = client.post(f"/recipes/{rid}/delete")
    assert reply.headers["Location"].endswith(f"/recipes/{rid}")


def test_static_file_is_served(client, tmp_path):
    (tmp_path / "style.css").write_text("body{}")
    reply = client.get("/style.css")
    assert reply.status_code == 200
    assert reply.data == b"body{}"


def test_missing_path_renders_shell_with_404(client):
    reply = client.get("/nowhere/at/all")
    assert reply.status_code == 404
    assert 'href="/recipes/add"' in reply.get_data(as_text=True)


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0


def test_main_rejects_bad_address():
    with pytest.raises(SystemExit) as excinfo:
        main(["--addr", "no-port-here"])
    assert excinfo.value.code == 2