"""
Data access layer for linkbio.

``LinkBioService`` is the only way callers read or change profile and link
state. Every call waits out a simulated network latency first so callers
exercise their loading states, then delegates to the shared
``LinkBioStore``. Mutations made through one service are visible to every
later read of the same store.

Errors surface as the typed exceptions in ``errors``:

- ``NotFound`` when update_link targets a missing id
- ``StoreUnavailable`` when the store is marked unreachable
- ``ValidationError`` for input of the wrong shape, and for values that
  break the content rules when validation is enabled

``delete_link`` is idempotent: deleting an unknown id is a no-op.
"""

import asyncio
import re
from typing import List, Optional, Union

import pydantic

from database import LinkBioStore
from errors import ValidationError
from schemas import (
    Link,
    LinkBioData,
    LinkCreate,
    LinkIcon,
    LinkPatch,
    Preview,
    PreviewLink,
    UserProfile,
    UserProfilePatch,
)

# milliseconds, per operation
LATENCY_MS = {
    "get_profile": 800,
    "get_links": 600,
    "update_link": 500,
    "create_link": 700,
    "delete_link": 400,
    "update_profile": 600,
}

TITLE_MAX = 60
URL_RE = re.compile(r"^(https?:)//[\w.-]+(?:\:[0-9]+)?(?:/[^\s]*)?$")
COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
USERNAME_RE = re.compile(r"^[a-z0-9_]{3,24}$")


# ----------------------- Helpers -----------------------

def sanitize_text(text: str) -> str:
    return text.strip()


def validate_url(url: str) -> bool:
    return bool(URL_RE.match(url))


def validate_color(value: str) -> bool:
    return bool(COLOR_RE.match(value))


def changes_from(patch) -> dict:
    """Fields the patch actually carries. Absent and null both mean unchanged."""
    return {k: v for k, v in patch.model_dump(exclude_unset=True).items() if v is not None}


def parse(model, data: dict):
    """Validate a raw dict into ``model``, reporting the first bad field."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(field, first["msg"]) from e


def avatar_initial(username: str) -> str:
    return username[:1].upper() or "U"


def share_url(share_host: str, username: str) -> str:
    return f"{share_host}/@{username}"


class LinkBioService:
    def __init__(
        self,
        store: Optional[LinkBioStore] = None,
        latency_scale: float = 1.0,
        validate: bool = True,
        share_host: str = "linkbio.com",
    ):
        self.store = store if store is not None else LinkBioStore()
        self.latency_scale = latency_scale
        self.validate = validate
        self.share_host = share_host

    async def _delay(self, operation: str):
        seconds = LATENCY_MS[operation] * self.latency_scale / 1000
        if seconds > 0:
            await asyncio.sleep(seconds)

    # ----------------------- Validation -----------------------

    def _clean_link_fields(self, fields: dict) -> dict:
        if not self.validate:
            return fields
        cleaned = dict(fields)
        if "title" in cleaned:
            title = sanitize_text(cleaned["title"])
            if not title:
                raise ValidationError("title", "Title must not be empty")
            cleaned["title"] = title[:TITLE_MAX]
        if "url" in cleaned:
            url = cleaned["url"].strip()
            if not validate_url(url):
                raise ValidationError("url", f"Invalid URL: {url}")
            cleaned["url"] = url
        if "icon" in cleaned:
            cleaned["icon"] = cleaned["icon"].strip().lower()
        return cleaned

    def _clean_profile_fields(self, fields: dict) -> dict:
        if not self.validate:
            return fields
        cleaned = dict(fields)
        if "username" in cleaned:
            username = cleaned["username"].strip().lower()
            if not USERNAME_RE.match(username):
                raise ValidationError("username", "Invalid username")
            cleaned["username"] = username
        for key in ("background_color", "button_color"):
            if key in cleaned and not validate_color(cleaned[key]):
                raise ValidationError(key, f"Invalid color: {cleaned[key]}")
        if "avatar" in cleaned:
            avatar = cleaned["avatar"].strip()
            if avatar and not validate_url(avatar):
                raise ValidationError("avatar", f"Invalid URL: {avatar}")
            cleaned["avatar"] = avatar
        return cleaned

    # ----------------------- Reads -----------------------

    async def get_profile(self) -> UserProfile:
        await self._delay("get_profile")
        return await self.store.get_profile()

    async def get_links(self) -> List[Link]:
        await self._delay("get_links")
        return await self.store.list_links()

    async def get_data(self) -> LinkBioData:
        await self._delay("get_profile")
        return await self.store.snapshot()

    async def get_preview(self) -> Preview:
        await self._delay("get_profile")
        data = await self.store.snapshot()
        profile = data.profile
        return Preview(
            username=profile.username,
            display_name=profile.display_name,
            bio=profile.bio,
            avatar=profile.avatar or None,
            avatar_initial=avatar_initial(profile.username),
            background_color=profile.background_color,
            button_color=profile.button_color,
            share_url=share_url(self.share_host, profile.username),
            links=[
                PreviewLink(id=link.id, title=link.title, url=link.url, icon=LinkIcon(link.icon))
                for link in data.links
                if link.is_active
            ],
        )

    # ----------------------- Mutations -----------------------

    async def update_link(self, link_id: str, patch: Union[LinkPatch, dict]) -> Link:
        if isinstance(patch, dict):
            patch = parse(LinkPatch, patch)
        changes = self._clean_link_fields(changes_from(patch))
        await self._delay("update_link")
        return await self.store.update_link(link_id, changes)

    async def create_link(self, data: Union[LinkCreate, dict]) -> Link:
        if isinstance(data, dict):
            data = parse(LinkCreate, data)
        fields = self._clean_link_fields(data.model_dump())
        await self._delay("create_link")
        return await self.store.insert_link(fields)

    async def delete_link(self, link_id: str) -> None:
        await self._delay("delete_link")
        await self.store.delete_link(link_id)

    async def update_profile(self, patch: Union[UserProfilePatch, dict]) -> UserProfile:
        if isinstance(patch, dict):
            patch = parse(UserProfilePatch, patch)
        changes = self._clean_profile_fields(changes_from(patch))
        await self._delay("update_profile")
        return await self.store.update_profile(changes)
