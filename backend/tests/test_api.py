import json
import uuid

import pytest

from grid_editor.extensions import db
from grid_editor.models import AuditLog, Media, PropertyValue

CONTENT_KEY = "5b0f3c1e-2d4a-4e8b-9f6a-1c2d3e4f5a6b"
PROPERTY_URL = f"/api/v1/content/{CONTENT_KEY}/properties/body"


def _grid_json(*controls):
    return json.dumps({"sections": [{"rows": [{"areas": [{"controls": list(controls)}]}]}]})


def _create_grid_data_type(client, headers, **configuration):
    response = client.post("/api/v1/data-types", headers=headers, json={
        "name": "Page body",
        "editorAlias": "Grid",
        "configuration": configuration,
    })
    assert response.status_code == 201
    return response.get_json()


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_login(client, user):
    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": "s3cret-password"})
    assert response.status_code == 200
    assert "access_token" in response.get_json()

    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": "wrong"})
    assert response.status_code == 401


def test_property_editors_are_listed(client, auth_headers):
    response = client.get("/api/v1/property-editors", headers=auth_headers)

    aliases = [item["alias"] for item in response.get_json()["items"]]
    assert aliases == ["Grid", "RichText", "MediaPicker"]

    grid = client.get("/api/v1/property-editors/Grid", headers=auth_headers).get_json()
    assert grid["hide_label"] is True
    assert grid["icon"] == "icon-layout"
    assert client.get("/api/v1/property-editors/Nope", headers=auth_headers).status_code == 404


def test_endpoints_require_token(client):
    assert client.get("/api/v1/property-editors").status_code == 401


def test_invalid_grid_configuration_is_rejected(client, auth_headers):
    response = client.post("/api/v1/data-types", headers=auth_headers, json={
        "name": "Broken",
        "editorAlias": "Grid",
        "configuration": {"items": {"columns": -1}},
    })

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "InvalidConfiguration"
    assert body["results"][0]["members"] == ["columns"]


def test_save_and_load_grid_with_pasted_image(app, client, auth_headers, user, tmp_path):
    (tmp_path / "tmp" / "pasted.jpg").write_bytes(b"jpeg-bytes")
    media_parent = f"udi://media/{uuid.uuid4().hex}"
    data_type = _create_grid_data_type(client, auth_headers, mediaParentId=media_parent)

    raw = _grid_json(
        {"editor": {"alias": "rte"}, "value": "<p><img src='/media/tmp/pasted.jpg'></p>"},
        {"editor": {"alias": "headline"}, "value": "Title"},
    )
    response = client.put(PROPERTY_URL, headers=auth_headers, json={"dataTypeId": data_type["id"], "value": raw})
    assert response.status_code == 200

    media = Media.query.one()
    assert media.created_by == user.id
    assert media.parent_key == str(uuid.UUID(media_parent.rsplit("/", 1)[1]))
    assert (tmp_path / "uploads" / media.url.rsplit("/", 1)[1]).read_bytes() == b"jpeg-bytes"
    assert not (tmp_path / "tmp" / "pasted.jpg").exists()

    stored = PropertyValue.query.one().value
    rte, headline = json.loads(stored)["sections"][0]["rows"][0]["areas"][0]["controls"]
    assert rte["value"] == f'<p><img src="" data-udi="{media.udi}"></p>'
    assert headline["value"] == "Title"

    response = client.get(PROPERTY_URL, headers=auth_headers)
    assert response.status_code == 200
    assert "Last-Modified" in response.headers
    controls = response.get_json()["value"]["sections"][0]["rows"][0]["areas"][0]["controls"]
    assert controls[0]["value"] == f'<p><img src="{media.url}" data-udi="{media.udi}"></p>'

    response = client.get(f"{PROPERTY_URL}/references", headers=auth_headers)
    assert response.get_json()["references"] == [str(media.udi)]

    response = client.get(f"{PROPERTY_URL}/index", headers=auth_headers)
    names = [field["name"] for field in response.get_json()["fields"]]
    assert names == ["__Raw_body", "body"]

    actions = sorted(log.action for log in AuditLog.query.all())
    assert actions == ["data_type.create", "media.create", "property.save"]


def test_load_absent_value_returns_empty_string(client, auth_headers):
    data_type = _create_grid_data_type(client, auth_headers)

    response = client.get(f"{PROPERTY_URL}?dataTypeId={data_type['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {"value": ""}
    assert client.get(PROPERTY_URL, headers=auth_headers).status_code == 404


def test_blank_value_is_stored_as_null(client, auth_headers):
    data_type = _create_grid_data_type(client, auth_headers)

    response = client.put(PROPERTY_URL, headers=auth_headers, json={"dataTypeId": data_type["id"], "value": "  "})

    assert response.status_code == 200
    assert response.get_json()["value"] is None
    assert client.get(PROPERTY_URL, headers=auth_headers).get_json() == {"value": ""}


def test_malformed_grid_is_rejected(client, auth_headers):
    data_type = _create_grid_data_type(client, auth_headers)

    response = client.put(PROPERTY_URL, headers=auth_headers, json={
        "dataTypeId": data_type["id"],
        "value": '{"sections": [{"rows": 5}]}',
    })

    assert response.status_code == 400
    assert response.get_json()["error"] == "MalformedValue"
    assert PropertyValue.query.count() == 0


def test_values_are_stored_per_culture(client, auth_headers):
    data_type = _create_grid_data_type(client, auth_headers)
    english = _grid_json({"editor": {"alias": "headline"}, "value": "Hello"})
    danish = _grid_json({"editor": {"alias": "headline"}, "value": "Hej"})

    for culture, value in (("en-US", english), ("da-DK", danish)):
        response = client.put(PROPERTY_URL, headers=auth_headers, json={
            "dataTypeId": data_type["id"],
            "value": value,
            "culture": culture,
        })
        assert response.status_code == 200

    response = client.get(f"{PROPERTY_URL}?culture=da-DK", headers=auth_headers)
    controls = response.get_json()["value"]["sections"][0]["rows"][0]["areas"][0]["controls"]
    assert controls[0]["value"] == "Hej"


def test_stale_save_is_rejected(client, auth_headers):
    data_type = _create_grid_data_type(client, auth_headers)
    body = {"dataTypeId": data_type["id"], "value": _grid_json()}
    assert client.put(PROPERTY_URL, headers=auth_headers, json=body).status_code == 200

    headers = {**auth_headers, "If-Unmodified-Since": "Sat, 01 Jan 2000 00:00:00 GMT"}
    response = client.put(PROPERTY_URL, headers=headers, json=body)
    assert response.status_code == 409

    headers = {**auth_headers, "If-Unmodified-Since": "not a date"}
    assert client.put(PROPERTY_URL, headers=headers, json=body).status_code == 400


def test_audit_logs_are_immutable(client, auth_headers):
    _create_grid_data_type(client, auth_headers)
    log = AuditLog.query.first()
    log.action = "changed"

    with pytest.raises(RuntimeError):
        db.session.commit()
    db.session.rollback()


def test_image_pasted_into_existing_property_twice_becomes_one_media_item(client, auth_headers, tmp_path):
    data_type = _create_grid_data_type(client, auth_headers)
    body = {"dataTypeId": data_type["id"], "value": _grid_json({"editor": {"alias": "rte"}, "value": "<p>draft</p>"})}
    assert client.put(PROPERTY_URL, headers=auth_headers, json=body).status_code == 200

    (tmp_path / "tmp" / "pasted.jpg").write_bytes(b"jpeg-bytes")
    pasted = "<img src='/media/tmp/pasted.jpg'>"
    body["value"] = _grid_json(
        {"editor": {"alias": "rte"}, "value": pasted},
        {"editor": {"alias": "RTE"}, "value": pasted},
    )
    response = client.put(PROPERTY_URL, headers=auth_headers, json=body)
    assert response.status_code == 200

    media = Media.query.one()
    row = PropertyValue.query.one()
    assert row.data_type_id == data_type["id"]
    controls = json.loads(row.value)["sections"][0]["rows"][0]["areas"][0]["controls"]
    assert [control["value"] for control in controls] == [f'<img src="" data-udi="{media.udi}">'] * 2
