"""
Data schemas for linkbio

Each record is a Pydantic model. Attributes are snake_case in Python and
camelCase on the wire (``is_active`` <-> ``isActive``); either name is accepted
on input.

Records:
- Link          -> one outbound link on the landing page
- UserProfile   -> the single profile that owns the page
- LinkBioData   -> profile + ordered links

Patches (every field optional, absent means unchanged):
- LinkPatch, UserProfilePatch

Inputs:
- LinkCreate    -> a Link without id
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LinkIcon(str, Enum):
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    GLOBE = "globe"

    @classmethod
    def _missing_(cls, value):
        # unknown keys render with the default icon
        return cls.GLOBE

    @property
    def label(self) -> str:
        return ICON_LABELS[self]


ICON_LABELS = {
    LinkIcon.INSTAGRAM: "Instagram",
    LinkIcon.YOUTUBE: "YouTube",
    LinkIcon.GLOBE: "Website",
}

DEFAULT_ICON = LinkIcon.GLOBE


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Link(CamelModel):
    id: str = Field(..., description="Opaque id, assigned at creation")
    title: str = Field(..., description="Display text")
    url: str = Field(..., description="https://...")
    is_active: bool = Field(..., description="Only active links are shown publicly")
    icon: str = Field(..., description="Icon key, unknown keys fall back to globe")
    order: int = Field(..., description="Advisory display order")


class LinkCreate(CamelModel):
    title: str
    url: str
    is_active: bool = True
    icon: str = DEFAULT_ICON.value
    order: Optional[int] = Field(None, description="Defaults to len(links) + 1")


class LinkPatch(CamelModel):
    title: Optional[str] = None
    url: Optional[str] = None
    is_active: Optional[bool] = None
    icon: Optional[str] = None
    order: Optional[int] = None


class UserProfile(CamelModel):
    id: str
    username: str = Field(..., description="Handle used in the share URL")
    display_name: str
    bio: str
    avatar: str = Field(..., description="Image URL, empty falls back to an initial badge")
    background_color: str = Field(..., description="#rrggbb")
    button_color: str = Field(..., description="#rrggbb")


class UserProfilePatch(CamelModel):
    username: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    background_color: Optional[str] = None
    button_color: Optional[str] = None


class LinkBioData(CamelModel):
    profile: UserProfile
    links: List[Link]


# ----------------------- Preview -----------------------

class PreviewLink(CamelModel):
    id: str
    title: str
    url: str
    icon: LinkIcon


class Preview(CamelModel):
    username: str
    display_name: str
    bio: str
    avatar: Optional[str] = None
    avatar_initial: str
    background_color: str
    button_color: str
    share_url: str
    links: List[PreviewLink] = []


class IconOption(CamelModel):
    value: LinkIcon
    label: str


class ColorPreset(CamelModel):
    name: str
    value: str


class ColorPresets(CamelModel):
    background: List[ColorPreset]
    button: List[ColorPreset]


COLOR_PRESETS = ColorPresets(
    background=[
        ColorPreset(name="Escuro", value="#1a1a1a"),
        ColorPreset(name="Preto", value="#000000"),
        ColorPreset(name="Cinza Escuro", value="#2d2d2d"),
        ColorPreset(name="Azul Escuro", value="#1e293b"),
        ColorPreset(name="Verde Escuro", value="#14532d"),
    ],
    button=[
        ColorPreset(name="Verde", value="#00d632"),
        ColorPreset(name="Azul", value="#3b82f6"),
        ColorPreset(name="Roxo", value="#8b5cf6"),
        ColorPreset(name="Rosa", value="#ec4899"),
        ColorPreset(name="Laranja", value="#f97316"),
    ],
)
