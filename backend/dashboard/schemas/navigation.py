from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SidebarUser(BaseModel):
    model_config = _camel

    name: str
    email: str
    avatar: str


class Team(BaseModel):
    model_config = _camel

    name: str
    logo: str
    plan: str


class NavItem(BaseModel):
    """A link (``url``) or a collapsible entry with nested ``items``; ``icon`` names a UI icon."""

    model_config = _camel

    title: str
    url: Optional[str] = None
    badge: Optional[str] = None
    icon: Optional[str] = None
    items: Optional[List["NavItem"]] = None


class NavGroup(BaseModel):
    model_config = _camel

    title: str
    items: List[NavItem]


class SidebarData(BaseModel):
    model_config = _camel

    user: SidebarUser
    teams: List[Team]
    nav_groups: List[NavGroup]
