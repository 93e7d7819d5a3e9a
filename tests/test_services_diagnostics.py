import io

import pytest
import respx
from httpx import Response

from opsmngr.core.client import OpsManagerClient
from opsmngr.core.context import Context
from opsmngr.core.errors import APIError
from opsmngr.services import DiagnosticsListOptions, DiagnosticsService

DIAG_PATH = "/api/public/v1.0/groups/5e66185d917b220fbd8bb4d1/diagnostics"
ARCHIVE = b"\x1f\x8b\x08\x00\x00\x00\x00\x00\x00\x03diagnostics"


@pytest.mark.asyncio
@respx.mock
async def test_get_streams_archive_into_writer():
    route = respx.get(host="cloud.mongodb.com", path=DIAG_PATH).mock(
        return_value=Response(200, content=ARCHIVE, headers={"Content-Type": "application/gzip"})
    )
    out = io.BytesIO()
    client = OpsManagerClient()
    async with client:
        resp = await DiagnosticsService(client).get(
            Context(),
            "5e66185d917b220fbd8bb4d1",
            DiagnosticsListOptions(limit=10, minutes=5),
            out,
        )

    assert resp.status_code == 200
    assert out.getvalue() == ARCHIVE
    request = route.calls[0].request
    assert request.headers["Accept"] == "application/gzip"
    assert request.url.params["limit"] == "10"
    assert request.url.params["minutes"] == "5"


@pytest.mark.asyncio
@respx.mock
async def test_error_status_writes_nothing():
    respx.get(host="cloud.mongodb.com", path=DIAG_PATH).mock(
        return_value=Response(401, json={"detail": "Unauthorized", "error": 401})
    )
    out = io.BytesIO()
    client = OpsManagerClient()
    async with client:
        with pytest.raises(APIError) as exc:
            await DiagnosticsService(client).get(
                Context(), "5e66185d917b220fbd8bb4d1", None, out
            )

    assert exc.value.status_code == 401
    assert out.getvalue() == b""
