import json

import pytest
import respx
from httpx import Response

from opsmngr.core.client import OpsManagerClient
from opsmngr.core.context import Context
from opsmngr.core.errors import APIError, ArgumentError
from opsmngr.core.models import Organization
from opsmngr.services import OrganizationsListOptions, Services

BASE = "https://cloud.mongodb.com/api/public/v1.0/"
ORGS_PATH = "/api/public/v1.0/orgs"

ORGS_PAYLOAD = {
    "links": [
        {"rel": "self", "href": BASE + "orgs?pageNum=2&itemsPerPage=1"},
    ],
    "results": [
        {
            "id": "5980cfdf0b6d97029d82f86e",
            "links": [{"rel": "self", "href": BASE + "orgs/5980cfdf0b6d97029d82f86e"}],
            "name": "Acme & Co",
        }
    ],
    "totalCount": 2,
}


@pytest.fixture
def services():
    client = OpsManagerClient()
    return client, Services(client)


@pytest.mark.asyncio
@respx.mock
async def test_list_sends_options_as_query(services):
    client, svc = services
    route = respx.get(host="cloud.mongodb.com", path=ORGS_PATH).mock(
        return_value=Response(200, json=ORGS_PAYLOAD)
    )

    opts = OrganizationsListOptions(page_num=2, items_per_page=1, name="Acme")
    async with client:
        orgs = await svc.organizations.list(Context(), opts)

    params = route.calls[0].request.url.params
    assert params["pageNum"] == "2"
    assert params["itemsPerPage"] == "1"
    assert params["name"] == "Acme"
    assert "includeCount" not in params

    assert orgs.total_count == 2
    assert orgs.results[0].name == "Acme & Co"
    assert orgs.current_page() == 2
    assert orgs.is_last_page()


@pytest.mark.asyncio
@respx.mock
async def test_list_without_options_sends_no_query(services):
    client, svc = services
    route = respx.get(host="cloud.mongodb.com", path=ORGS_PATH).mock(
        return_value=Response(200, json={"results": [], "totalCount": 0})
    )
    async with client:
        orgs = await svc.organizations.list(Context())

    assert route.calls[0].request.url.query == b""
    assert orgs.results == []


@pytest.mark.asyncio
@respx.mock
async def test_create_posts_json_body(services):
    client, svc = services
    route = respx.post(BASE + "orgs").mock(
        return_value=Response(201, json={"id": "1", "name": "<dev> & <ops>"})
    )
    async with client:
        org = await svc.organizations.create(Context(), Organization(name="<dev> & <ops>"))

    request = route.calls[0].request
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b'{"name":"<dev> & <ops>","links":[]}'
    assert json.loads(request.content)["name"] == "<dev> & <ops>"
    assert org.id == "1"


@pytest.mark.asyncio
@respx.mock
async def test_get_not_found_raises_api_error(services):
    client, svc = services
    respx.get(BASE + "orgs/nope").mock(
        return_value=Response(
            404,
            json={"detail": "Org not found", "error": 404, "errorCode": "ORG_NOT_FOUND", "reason": "Not Found"},
        )
    )
    async with client:
        with pytest.raises(APIError) as exc:
            await svc.organizations.get(Context(), "nope")

    assert exc.value.status_code == 404
    assert exc.value.error_code == "ORG_NOT_FOUND"


@pytest.mark.asyncio
@respx.mock
async def test_delete_accepts_empty_body(services):
    client, svc = services
    route = respx.delete(BASE + "orgs/1").mock(return_value=Response(204))
    async with client:
        assert await svc.organizations.delete(Context(), "1") is None

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_create_without_org_raises_argument_error(services):
    client, svc = services
    route = respx.post(BASE + "orgs").mock(return_value=Response(201, json={}))
    async with client:
        with pytest.raises(ArgumentError) as excinfo:
            await svc.organizations.create(Context(), None)

    assert excinfo.value.arg == "org"
    assert not route.called
