from __future__ import annotations

from typing import Optional

from opsmngr.core.context import Context
from opsmngr.core.errors import ArgumentError
from opsmngr.core.models import Organization, Organizations
from opsmngr.core.query import ListOptions, set_query_params
from opsmngr.core.response import TypedValue

from ._base import Service, require

ORGS_BASE_PATH = "orgs"


class OrganizationsListOptions(ListOptions):
    name: str = ""


class OrganizationsService(Service):
    async def list(
        self, ctx: Context, options: Optional[ListOptions] = None
    ) -> Organizations:
        path = set_query_params(ORGS_BASE_PATH, options)
        req = self.client.new_request("GET", path)
        resp = await self.client.do(ctx, req, TypedValue(Organizations, Organizations()))
        return resp.value

    async def get(self, ctx: Context, org_id: str) -> Optional[Organization]:
        require("org_id", org_id)
        req = self.client.new_request("GET", f"{ORGS_BASE_PATH}/{org_id}")
        resp = await self.client.do(ctx, req, TypedValue(Organization))
        return resp.value

    async def create(self, ctx: Context, org: Organization) -> Optional[Organization]:
        if org is None:
            raise ArgumentError("org", "it must be set")
        req = self.client.new_request("POST", ORGS_BASE_PATH, org)
        resp = await self.client.do(ctx, req, TypedValue(Organization))
        return resp.value

    async def delete(self, ctx: Context, org_id: str) -> None:
        require("org_id", org_id)
        req = self.client.new_request("DELETE", f"{ORGS_BASE_PATH}/{org_id}")
        await self.client.do(ctx, req)
