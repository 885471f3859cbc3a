"""
Tests for the CRUD endpoints of every resource.

The four resources share one implementation, so most behaviour is
checked for all of them through ``RESOURCE_CASES``.
"""

import pytest

from portfolio_api.app.services.crud_service import CRUDService


# (route name, complete valid payload, required field)
RESOURCE_CASES = [
    (
        "membres",
        {"name": "John Doe", "email": "john@example.com", "image": "http://example.com/image.jpg"},
        "name",
    ),
    ("pays", {"name": "France", "image": "http://example.com/flag.png"}, "name"),
    (
        "projects",
        {"title": "Website", "description": "Corporate site", "image": "http://example.com/p.jpg"},
        "title",
    ),
    ("services", {"name": "Web development", "description": "Sites and apps"}, "name"),
]

RESOURCE_IDS = [case[0] for case in RESOURCE_CASES]


def _create(client, headers, resource, payload):
    response = client.post(f"/crud/{resource}", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.parametrize("resource,payload,required", RESOURCE_CASES, ids=RESOURCE_IDS)
class TestResourceCrud:
    """Behaviour shared by every resource."""

    def test_create(self, client, auth_headers, resource, payload, required):
        response = client.post(f"/crud/{resource}", json=payload, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] is True
        assert body["message"].endswith("created successfully")
        assert isinstance(body["data"]["id"], int)
        for field, value in payload.items():
            assert body["data"][field] == value

    def test_create_missing_required_field(self, client, auth_headers, resource, payload, required):
        incomplete = {k: v for k, v in payload.items() if k != required}

        response = client.post(f"/crud/{resource}", json=incomplete, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] is False
        assert body["errors"][required] == [f"The {required} field is required."]

    def test_create_without_body(self, client, auth_headers, resource, payload, required):
        response = client.post(f"/crud/{resource}", headers=auth_headers)

        assert response.status_code == 400
        assert required in response.json()["errors"]

    def test_create_with_non_object_body(self, client, auth_headers, resource, payload, required):
        response = client.post(f"/crud/{resource}", json=[payload], headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"body": ["The request body must be a JSON object."]}

    def test_round_trip(self, client, auth_headers, resource, payload, required):
        created = _create(client, auth_headers, resource, payload)

        response = client.get(f"/crud/{resource}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"status": True, "data": created}

    def test_list(self, client, auth_headers, resource, payload, required):
        first = _create(client, auth_headers, resource, payload)
        second_payload = dict(payload)
        if "email" in second_payload:
            second_payload["email"] = "jane@example.com"
        second = _create(client, auth_headers, resource, second_payload)

        response = client.get(f"/crud/{resource}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] is True
        assert [item["id"] for item in body["data"]] == [first["id"], second["id"]]

    def test_list_empty(self, client, auth_headers, resource, payload, required):
        response = client.get(f"/crud/{resource}", headers=auth_headers)

        assert response.json() == {"status": True, "data": []}

    def test_update(self, client, auth_headers, resource, payload, required):
        created = _create(client, auth_headers, resource, payload)
        changed = dict(payload, **{required: "Renamed"})

        response = client.put(f"/crud/{resource}/{created['id']}", json=changed, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] is True
        assert body["message"].endswith("updated successfully")
        assert body["data"]["id"] == created["id"]
        assert body["data"][required] == "Renamed"
        fetched = client.get(f"/crud/{resource}/{created['id']}", headers=auth_headers).json()
        assert fetched["data"][required] == "Renamed"

    def test_update_clears_omitted_optional_fields(self, client, auth_headers, resource, payload, required):
        created = _create(client, auth_headers, resource, payload)
        minimal = {k: v for k, v in payload.items() if k in (required, "email")}
        optional = [k for k in payload if k not in minimal]

        response = client.put(f"/crud/{resource}/{created['id']}", json=minimal, headers=auth_headers)

        assert response.status_code == 200
        for field in optional:
            assert response.json()["data"][field] is None

    def test_update_requires_required_fields(self, client, auth_headers, resource, payload, required):
        created = _create(client, auth_headers, resource, payload)
        partial = {k: v for k, v in payload.items() if k != required}

        response = client.put(f"/crud/{resource}/{created['id']}", json=partial, headers=auth_headers)

        assert response.status_code == 400
        assert required in response.json()["errors"]
        fetched = client.get(f"/crud/{resource}/{created['id']}", headers=auth_headers).json()
        assert fetched["data"] == created

    def test_delete(self, client, auth_headers, resource, payload, required):
        created = _create(client, auth_headers, resource, payload)

        response = client.delete(f"/crud/{resource}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] is True
        assert body["message"].endswith("deleted successfully")
        assert client.get(f"/crud/{resource}/{created['id']}", headers=auth_headers).status_code == 404

    def test_unknown_id(self, client, auth_headers, resource, payload, required):
        assert client.get(f"/crud/{resource}/999", headers=auth_headers).status_code == 404
        assert client.put(f"/crud/{resource}/999", json=payload, headers=auth_headers).status_code == 404
        assert client.delete(f"/crud/{resource}/999", headers=auth_headers).status_code == 404

    def test_id_beyond_storage_range(self, client, auth_headers, resource, payload, required):
        huge = 2**64

        assert client.get(f"/crud/{resource}/{huge}", headers=auth_headers).status_code == 404
        assert client.put(f"/crud/{resource}/{huge}", json=payload, headers=auth_headers).status_code == 404
        assert client.delete(f"/crud/{resource}/{huge}", headers=auth_headers).status_code == 404
        assert client.get(f"/crud/{resource}/0", headers=auth_headers).status_code == 404

    def test_update_unknown_id_with_invalid_body_is_404(self, client, auth_headers, resource, payload, required):
        response = client.put(f"/crud/{resource}/999", json={}, headers=auth_headers)

        assert response.status_code == 404

    def test_non_integer_id(self, client, auth_headers, resource, payload, required):
        response = client.get(f"/crud/{resource}/abc", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["status"] is False

    def test_requires_authentication(self, client, resource, payload, required):
        assert client.get(f"/crud/{resource}").status_code == 401
        assert client.post(f"/crud/{resource}", json=payload).status_code == 401
        assert client.get(f"/crud/{resource}/1").status_code == 401
        assert client.put(f"/crud/{resource}/1", json=payload).status_code == 401
        assert client.delete(f"/crud/{resource}/1").status_code == 401


class TestMessages:
    """Response messages name the resource."""

    def test_not_found_messages(self, client, auth_headers):
        expected = {
            "membres": "Membre not found",
            "pays": "Pay not found",
            "projects": "Project not found",
            "services": "Service not found",
        }
        for resource, message in expected.items():
            response = client.get(f"/crud/{resource}/1", headers=auth_headers)
            assert response.json() == {"status": False, "message": message}

    def test_country_example(self, client, auth_headers):
        response = client.post("/crud/pays", json={"name": "France"}, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Pay created successfully"
        assert body["data"]["name"] == "France"
        assert body["data"]["image"] is None

        fetched = client.get(f"/crud/pays/{body['data']['id']}", headers=auth_headers)
        assert fetched.json()["data"]["name"] == "France"

    def test_delete_message(self, client, auth_headers):
        created = _create(client, auth_headers, "services", {"name": "Hosting"})

        response = client.delete(f"/crud/services/{created['id']}", headers=auth_headers)

        assert response.json() == {"status": True, "message": "Service deleted successfully"}


class TestFieldRules:
    """Rule table details exercised through HTTP."""

    def test_unknown_fields_are_ignored(self, client, auth_headers):
        data = _create(client, auth_headers, "services", {"name": "Hosting", "price": 10, "id": 77})

        assert "price" not in data
        assert data["id"] != 77

    def test_name_too_long(self, client, auth_headers):
        response = client.post("/crud/pays", json={"name": "x" * 256}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "name": ["The name field must not be greater than 255 characters."]
        }

    def test_non_string_value(self, client, auth_headers):
        response = client.post("/crud/projects", json={"title": 12}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"title": ["The title field must be a string."]}

    def test_values_are_trimmed(self, client, auth_headers):
        data = _create(client, auth_headers, "pays", {"name": "  Italy "})

        assert data["name"] == "Italy"


class TestMemberEmail:
    """Uniqueness of member e-mails."""

    def test_invalid_email(self, client, auth_headers):
        response = client.post(
            "/crud/membres", json={"name": "John", "email": "john"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"email": ["The email field must be a valid email address."]}

    def test_email_is_stored_as_submitted(self, client, auth_headers):
        created = _create(client, auth_headers, "membres", {"name": "John", "email": "John@Example.COM"})

        assert created["email"] == "John@Example.COM"
        fetched = client.get(f"/crud/membres/{created['id']}", headers=auth_headers).json()
        assert fetched["data"]["email"] == "John@Example.COM"

    def test_duplicate_email_on_create(self, client, auth_headers):
        _create(client, auth_headers, "membres", {"name": "John", "email": "john@example.com"})

        response = client.post(
            "/crud/membres", json={"name": "Other", "email": "john@example.com"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"email": ["The email has already been taken."]}

    def test_update_keeps_own_email(self, client, auth_headers):
        created = _create(client, auth_headers, "membres", {"name": "John", "email": "john@example.com"})

        response = client.put(
            f"/crud/membres/{created['id']}",
            json={"name": "John Smith", "email": "john@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "John Smith"

    def test_update_to_email_of_other_member(self, client, auth_headers):
        _create(client, auth_headers, "membres", {"name": "John", "email": "john@example.com"})
        jane = _create(client, auth_headers, "membres", {"name": "Jane", "email": "jane@example.com"})

        response = client.put(
            f"/crud/membres/{jane['id']}",
            json={"name": "Jane", "email": "john@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"email": ["The email has already been taken."]}

    def test_storage_rejects_duplicate_that_passed_precheck(self, client, auth_headers, monkeypatch):
        # Simulates two concurrent creates that both passed the uniqueness check.
        monkeypatch.setattr(CRUDService, "_check_unique", lambda self, field, value, exclude_id=None: None)
        payload = {"name": "John", "email": "john@example.com"}

        first = client.post("/crud/membres", json=payload, headers=auth_headers)
        second = client.post("/crud/membres", json=payload, headers=auth_headers)

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["errors"] == {"email": ["The email has already been taken."]}
        listed = client.get("/crud/membres", headers=auth_headers).json()["data"]
        assert len(listed) == 1

    def test_storage_rejects_duplicate_on_update(self, client, auth_headers, monkeypatch):
        _create(client, auth_headers, "membres", {"name": "John", "email": "john@example.com"})
        jane = _create(client, auth_headers, "membres", {"name": "Jane", "email": "jane@example.com"})
        monkeypatch.setattr(CRUDService, "_check_unique", lambda self, field, value, exclude_id=None: None)

        response = client.put(
            f"/crud/membres/{jane['id']}",
            json={"name": "Jane", "email": "john@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"email": ["The email has already been taken."]}


class TestAliases:
    """English aliases serve the same tables."""

    def test_members_alias(self, client, auth_headers):
        created = _create(client, auth_headers, "members", {"name": "John", "email": "john@example.com"})

        response = client.get(f"/crud/membres/{created['id']}", headers=auth_headers)

        assert response.json()["data"] == created

    def test_countries_alias(self, client, auth_headers):
        created = _create(client, auth_headers, "pays", {"name": "Spain"})

        response = client.get("/crud/countries", headers=auth_headers)

        assert response.json()["data"] == [created]
