from __future__ import annotations

from opsmngr.core.context import Context
from opsmngr.core.models import Agents, AgentType
from opsmngr.core.response import TypedValue

from ._base import Service, require

AGENTS_BASE_PATH = "groups/{group_id}/agents"


class AgentsService(Service):
    async def list_agent_links(self, ctx: Context, group_id: str) -> Agents:
        """List the links to the agent types of a project."""
        require("group_id", group_id)
        path = AGENTS_BASE_PATH.format(group_id=group_id)
        req = self.client.new_request("GET", path)
        resp = await self.client.do(ctx, req, TypedValue(Agents, Agents()))
        return resp.value

    async def list_agents_by_type(
        self, ctx: Context, group_id: str, agent_type: AgentType | str
    ) -> Agents:
        """List the agents of one type (MONITORING, BACKUP or AUTOMATION)."""
        require("group_id", group_id)
        agent_type = agent_type.value if isinstance(agent_type, AgentType) else agent_type
        require("agent_type", agent_type)
        path = AGENTS_BASE_PATH.format(group_id=group_id) + f"/{agent_type}"
        req = self.client.new_request("GET", path)
        resp = await self.client.do(ctx, req, TypedValue(Agents, Agents()))
        return resp.value
