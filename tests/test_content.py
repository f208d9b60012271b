import uuid

import pytest


@pytest.fixture
def api(client, tenant):
    base = f"/api/service/{tenant['service_id']}"
    headers = tenant["headers"]

    def call(method, path, body=None):
        return client.request(method, f"{base}{path}", json=body, headers=headers)

    return call


@pytest.fixture
def article(api):
    """Content type "Article": title (Text, required), views (Number)"""
    ct = api("POST", "/content_types", {"name": "Article"}).json()
    api("POST", f"/{ct['id']}/fields", {"display_id": "title", "field_type": "Text", "required": True})
    api("POST", f"/{ct['id']}/fields", {"display_id": "views", "field_type": "Number", "required": False})
    return ct["id"]


def test_create_and_get_content_type(api):
    r = api("POST", "/content_types", {"name": "Article"})
    assert r.status_code == 201
    ct = r.json()
    assert ct["name"] == "Article"

    r = api("GET", f"/content_types/{ct['id']}")
    assert r.status_code == 200
    assert r.json()["fields"] == []


def test_content_type_fields_are_ordered(api, article):
    r = api("GET", f"/content_types/{article}")
    fields = r.json()["fields"]
    assert [(f["display_id"], f["field_type"], f["required"]) for f in fields] == [
        ("title", "Text", True),
        ("views", "Number", False),
    ]


def test_unknown_content_type_is_not_found(api):
    assert api("GET", "/content_types/999").status_code == 404
    assert api("POST", "/999/fields", {"display_id": "x", "field_type": "Text"}).status_code == 404
    assert api("POST", "/999/content_items", {"data": {}}).status_code == 404
    assert api("GET", "/999/content_items").status_code == 404


def test_duplicate_field_display_id_rejected(api, article):
    r = api("POST", f"/{article}/fields", {"display_id": "title", "field_type": "Number"})
    assert r.status_code == 400
    assert "title" in r.json()["detail"]


def test_unknown_field_type_rejected(api, article):
    r = api("POST", f"/{article}/fields", {"display_id": "body", "field_type": "Markdown"})
    assert r.status_code == 422


def test_article_scenario(api, article):
    r = api("POST", f"/{article}/content_items", {"data": {"title": "Hello"}})
    assert r.status_code == 201
    assert r.json()["data"] == {"title": "Hello"}

    r = api("POST", f"/{article}/content_items", {"data": {"views": "100"}})
    assert r.status_code == 400
    assert "title" in r.json()["detail"]

    r = api("POST", f"/{article}/content_items", {"data": {"title": "Hi", "views": 3, "extra": True}})
    assert r.status_code == 201
    assert r.json()["data"] == {"title": "Hi", "views": 3}


def test_type_mismatch_is_rejected_and_not_stored(api, article, store):
    r = api("POST", f"/{article}/content_items", {"data": {"title": "Hi", "views": "3"}})
    assert r.status_code == 400
    assert "views" in r.json()["detail"]
    assert store.tables.get("content_items", []) == []


def test_created_item_round_trips(api, article):
    created = api("POST", f"/{article}/content_items", {"data": {"title": "Hi", "views": 3, "extra": 1}}).json()
    uuid.UUID(created["id"])

    r = api("GET", f"/content_items/{created['id']}")
    assert r.status_code == 200
    assert r.json()["data"] == {"title": "Hi", "views": 3}
    assert r.json()["content_type_id"] == article


def test_list_content_items(api, article):
    assert api("GET", f"/{article}/content_items").json() == []
    api("POST", f"/{article}/content_items", {"data": {"title": "a"}})
    api("POST", f"/{article}/content_items", {"data": {"title": "b"}})
    titles = sorted(i["data"]["title"] for i in api("GET", f"/{article}/content_items").json())
    assert titles == ["a", "b"]


def test_patch_merges_and_validates(api, article):
    item = api("POST", f"/{article}/content_items", {"data": {"title": "Hi"}}).json()

    r = api("PATCH", f"/content_items/{item['id']}", {"data": {"views": 10}})
    assert r.status_code == 200
    assert r.json()["data"] == {"title": "Hi", "views": 10}

    r = api("PATCH", f"/content_items/{item['id']}", {"data": {"views": "ten"}})
    assert r.status_code == 400
    assert api("GET", f"/content_items/{item['id']}").json()["data"] == {"title": "Hi", "views": 10}


def test_put_replaces_document(api, article):
    item = api("POST", f"/{article}/content_items", {"data": {"title": "Hi", "views": 1}}).json()

    r = api("PUT", f"/content_items/{item['id']}", {"data": {"title": "New"}})
    assert r.status_code == 200
    assert r.json()["data"] == {"title": "New"}

    r = api("PUT", f"/content_items/{item['id']}", {"data": {"views": 2}})
    assert r.status_code == 400
    assert "title" in r.json()["detail"]


@pytest.mark.parametrize("method", ["PATCH", "PUT"])
def test_empty_update_is_rejected(api, article, method):
    item = api("POST", f"/{article}/content_items", {"data": {"title": "Hi"}}).json()
    r = api(method, f"/content_items/{item['id']}", {"data": {}})
    assert r.status_code == 400


def test_create_with_empty_document_when_nothing_required(api):
    ct = api("POST", "/content_types", {"name": "Note"}).json()
    api("POST", f"/{ct['id']}/fields", {"display_id": "pinned", "field_type": "Boolean"})
    r = api("POST", f"/{ct['id']}/content_items", {"data": {}})
    assert r.status_code == 201
    assert r.json()["data"] == {}


def test_date_field_requires_rfc3339(api):
    ct = api("POST", "/content_types", {"name": "Event"}).json()
    api("POST", f"/{ct['id']}/fields", {"display_id": "starts_at", "field_type": "Date", "required": True})

    assert api("POST", f"/{ct['id']}/content_items", {"data": {"starts_at": "2024-01-01"}}).status_code == 400
    assert api("POST", f"/{ct['id']}/content_items", {"data": {"starts_at": "2024-01-01T09:00:00Z\n"}}).status_code == 400
    r = api("POST", f"/{ct['id']}/content_items", {"data": {"starts_at": "2024-01-01T09:00:00+09:00"}})
    assert r.status_code == 201


def test_delete_content_item(api, article):
    item = api("POST", f"/{article}/content_items", {"data": {"title": "Hi"}}).json()
    assert api("DELETE", f"/content_items/{item['id']}").status_code == 204
    assert api("GET", f"/content_items/{item['id']}").status_code == 404
    assert api("DELETE", f"/content_items/{item['id']}").status_code == 404


def test_missing_content_item_is_not_found(api):
    assert api("GET", f"/content_items/{uuid.uuid4()}").status_code == 404


def test_items_are_isolated_between_services(client, admin, api, article):
    item = api("POST", f"/{article}/content_items", {"data": {"title": "private"}}).json()
    other = admin.post("/api/service", json={"name": "Other"}).json()
    headers = {"x-api-key": other["api_key"]}
    base = f"/api/service/{other['service_id']}"

    assert client.get(f"{base}/content_items/{item['id']}", headers=headers).status_code == 404
    assert client.get(f"{base}/content_types/{article}", headers=headers).status_code == 404
    assert client.post(f"{base}/{article}/content_items", json={"data": {"title": "x"}}, headers=headers).status_code == 404


def test_schema_resolution_failure_is_server_error(api, article, store):
    store.failing.add("fields")
    r = api("POST", f"/{article}/content_items", {"data": {"title": "Hi"}})
    assert r.status_code == 500
    assert store.tables.get("content_items", []) == []
