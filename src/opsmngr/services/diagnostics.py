from __future__ import annotations

from typing import BinaryIO, Optional

from opsmngr.core.context import Context
from opsmngr.core.query import QueryOptions, set_query_params
from opsmngr.core.response import APIResponse, ByteSink

from ._base import Service, require

DIAGNOSTICS_BASE_PATH = "groups/{group_id}/diagnostics"


class DiagnosticsListOptions(QueryOptions):
    limit: int = 0
    minutes: int = 0


class DiagnosticsService(Service):
    async def get(
        self,
        ctx: Context,
        group_id: str,
        options: Optional[DiagnosticsListOptions],
        out: BinaryIO,
    ) -> APIResponse:
        """Download the project's diagnostics archive (gzip) into out."""
        require("group_id", group_id)
        path = set_query_params(DIAGNOSTICS_BASE_PATH.format(group_id=group_id), options)
        req = self.client.new_gzip_request("GET", path)
        return await self.client.do(ctx, req, ByteSink(out))
