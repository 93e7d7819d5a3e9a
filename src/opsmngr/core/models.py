from __future__ import annotations

from enum import Enum
from typing import Generic, List, Optional, TypeVar
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Link(BaseModel):
    rel: str = ""
    href: str = ""

    model_config = ConfigDict(extra="ignore")

    def href_query_param(self, param: str) -> Optional[str]:
        """
        Read one query parameter from href.
        Example: Link(rel="next", href=".../orgs?pageNum=3").href_query_param("pageNum") -> "3"
        """
        if not self.href:
            return None
        values = parse_qs(urlsplit(self.href).query).get(param)
        return values[0] if values else None


class ListResponse(BaseModel, Generic[T]):
    """
    Paginated list envelope.
    links and results are always lists: a missing or null value decodes to [].
    """

    links: List[Link] = Field(default_factory=list)
    results: List[T] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("links", "results", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    def link(self, rel: str) -> Optional[Link]:
        for link in self.links:
            if link.rel == rel:
                return link
        return None

    def current_page(self) -> int:
        """Page number of the self link; 1 when the server leaves it implicit."""
        self_link = self.link("self")
        if self_link is None:
            return 1
        page = self_link.href_query_param("pageNum")
        try:
            return int(page) if page else 1
        except ValueError:
            return 1

    def is_last_page(self) -> bool:
        return self.link("next") is None


# --- Agents ---


class AgentType(str, Enum):
    MONITORING = "MONITORING"
    BACKUP = "BACKUP"
    AUTOMATION = "AUTOMATION"


class Agent(BaseModel):
    type_name: str = Field(default="", alias="typeName")
    hostname: str = ""
    conf_count: int = Field(default=0, alias="confCount")
    last_conf: str = Field(default="", alias="lastConf")
    state_name: str = Field(default="", alias="stateName")
    ping_count: int = Field(default=0, alias="pingCount")
    is_managed: bool = Field(default=False, alias="isManaged")
    last_ping: str = Field(default="", alias="lastPing")
    tag: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Agents(ListResponse[Agent]):
    pass


# --- Organizations ---


class Organization(BaseModel):
    id: Optional[str] = None
    name: str
    links: List[Link] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Organizations(ListResponse[Organization]):
    pass


__all__ = [
    "Link",
    "ListResponse",
    "AgentType",
    "Agent",
    "Agents",
    "Organization",
    "Organizations",
]
