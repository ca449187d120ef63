"""End-to-end tests for the mock surface over HTTP against SQLite."""

import pytest

from mockapi.services.dispatcher import MockDispatcher


async def test_get_json_endpoint(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "GET", "/api/users", '{"users": []}', 200)

    response = await client.get(f"/mock/{test_project.id}/api/users")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.text == '{"users": []}'


async def test_missing_endpoint_is_404(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "GET", "/api/users", '{"users": []}', 200)

    response = await client.get(f"/mock/{test_project.id}/api/missing")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Endpoint not found",
        "detail": "No GET endpoint found at /api/missing for this project",
    }


async def test_unknown_project_is_404(client):
    response = await client.get("/mock/no-such-project/api/users")

    assert response.status_code == 404
    assert response.json()["error"] == "Endpoint not found"


async def test_delete_with_no_content(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "DELETE", "/api/resource", None, 204)

    response = await client.delete(f"/mock/{test_project.id}/api/resource")

    assert response.status_code == 204
    assert response.content == b""


async def test_post_with_created_status(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "POST", "/api/users", '{"id": "123", "created": true}', 201)

    response = await client.post(f"/mock/{test_project.id}/api/users", json={"name": "ignored"})

    assert response.status_code == 201
    assert response.json() == {"id": "123", "created": True}


@pytest.mark.parametrize("method", ["PUT", "PATCH"])
async def test_other_methods_dispatch(client, test_project, add_endpoint, method):
    await add_endpoint(test_project.id, method, "/api/users/1", "updated", 200)

    response = await client.request(method, f"/mock/{test_project.id}/api/users/1")

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/plain"
    assert response.text == "updated"


async def test_plain_text_response(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "GET", "/api/text", "Plain text response", 200)

    response = await client.get(f"/mock/{test_project.id}/api/text")

    assert response.headers["content-type"] == "text/plain"
    assert response.text == "Plain text response"


async def test_project_root_maps_to_slash(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "GET", "/", '{"root": true}', 200)

    bare = await client.get(f"/mock/{test_project.id}")
    slashed = await client.get(f"/mock/{test_project.id}/")

    assert bare.status_code == 200
    assert slashed.status_code == 200
    assert bare.json() == {"root": True}


@pytest.mark.parametrize("path", ["/api/users/", "/api/Users"])
async def test_no_path_folding(client, test_project, add_endpoint, path):
    await add_endpoint(test_project.id, "GET", "/api/users", '{"users": []}', 200)

    response = await client.get(f"/mock/{test_project.id}{path}")

    assert response.status_code == 404


async def test_method_mismatch_is_404(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "POST", "/api/users", "{}", 201)

    response = await client.get(f"/mock/{test_project.id}/api/users")

    assert response.status_code == 404
    assert "No GET endpoint" in response.json()["detail"]


async def test_key_gated_endpoint(client, test_project, add_endpoint, add_key):
    endpoint = await add_endpoint(test_project.id, "GET", "/api/protected", '{"data": "secret"}', 200, True)
    await add_key(endpoint.id, "valid-key")
    url = f"/mock/{test_project.id}/api/protected"

    missing = await client.get(url)
    wrong = await client.get(url, headers={"x-api-key": "invalid-key"})
    right = await client.get(url, headers={"x-api-key": "valid-key"})

    assert missing.status_code == 401
    assert missing.json() == {"error": "API key required"}
    assert wrong.status_code == 403
    assert wrong.json() == {"error": "Invalid API key"}
    assert right.status_code == 200
    assert right.json() == {"data": "secret"}


async def test_bearer_key(client, test_project, add_endpoint, add_key):
    endpoint = await add_endpoint(test_project.id, "GET", "/api/protected", "ok", 200, True)
    await add_key(endpoint.id, "valid-key")

    response = await client.get(
        f"/mock/{test_project.id}/api/protected",
        headers={"Authorization": "Bearer valid-key"},
    )

    assert response.status_code == 200
    assert response.text == "ok"


async def test_dedicated_header_wins_over_bearer(client, test_project, add_endpoint, add_key):
    endpoint = await add_endpoint(test_project.id, "GET", "/api/protected", "ok", 200, True)
    await add_key(endpoint.id, "valid-key")
    url = f"/mock/{test_project.id}/api/protected"

    wrong_header = await client.get(
        url, headers={"x-api-key": "invalid-key", "Authorization": "Bearer valid-key"}
    )
    right_header = await client.get(
        url, headers={"x-api-key": "valid-key", "Authorization": "Bearer invalid-key"}
    )

    assert wrong_header.status_code == 403
    assert right_header.status_code == 200


async def test_any_of_several_keys_works(client, test_project, add_endpoint, add_key):
    endpoint = await add_endpoint(test_project.id, "GET", "/api/protected", "ok", 200, True)
    await add_key(endpoint.id, "first")
    await add_key(endpoint.id, "second")
    url = f"/mock/{test_project.id}/api/protected"

    assert (await client.get(url, headers={"x-api-key": "first"})).status_code == 200
    assert (await client.get(url, headers={"x-api-key": "second"})).status_code == 200


async def test_ungated_endpoint_ignores_keys(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "GET", "/api/users", '{"users": []}', 200)

    response = await client.get(
        f"/mock/{test_project.id}/api/users", headers={"x-api-key": "anything"}
    )

    assert response.status_code == 200


async def test_storage_failure_is_500(app, client):
    class FailingRegistry:
        async def find_endpoints(self, project_id, method, path):
            raise ConnectionRefusedError("database unavailable")

        async def find_access_key(self, endpoint_id, key_value):
            raise ConnectionRefusedError("database unavailable")

    app.state.dispatcher = MockDispatcher(FailingRegistry())

    response = await client.get("/mock/any/api/users")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


async def test_unsupported_method_is_rejected(client, test_project):
    response = await client.request("OPTIONS", f"/mock/{test_project.id}/api/users")

    assert response.status_code == 405


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_deeply_nested_json_body(client, test_project, add_endpoint):
    body = "[" * 100000 + "]" * 100000
    await add_endpoint(test_project.id, "GET", "/deep", body, 200)

    response = await client.get(f"/mock/{test_project.id}/deep")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.text == body


async def test_informational_status_becomes_500(client, test_project, add_endpoint):
    await add_endpoint(test_project.id, "GET", "/api/continue", "ignored", 100)

    response = await client.get(f"/mock/{test_project.id}/api/continue")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
