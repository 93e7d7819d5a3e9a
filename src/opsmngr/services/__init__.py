"""Resource services built on top of a RequestDoer."""

from ._base import RequestDoer, Service
from .agents import AgentsService
from .diagnostics import DiagnosticsListOptions, DiagnosticsService
from .organizations import OrganizationsListOptions, OrganizationsService


class Services:
    """All resource services bound to one client."""

    def __init__(self, client: RequestDoer):
        self.agents = AgentsService(client)
        self.organizations = OrganizationsService(client)
        self.diagnostics = DiagnosticsService(client)


__all__ = [
    "RequestDoer",
    "Service",
    "Services",
    "AgentsService",
    "OrganizationsService",
    "OrganizationsListOptions",
    "DiagnosticsService",
    "DiagnosticsListOptions",
]
