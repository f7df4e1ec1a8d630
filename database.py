"""
In-memory store for linkbio

One authoritative table of links keyed by id (insertion ordered) and the
single profile record. Writes are serialized per entity:

- one asyncio.Lock per link id
- one lock for the profile
- one collection lock for create/delete, taken before any link lock

Each read-merge-write runs under its lock with no await in between, so a
cancelled caller never leaves a half-applied change behind.
"""

import asyncio
import logging
import secrets
from typing import Dict, List, Optional

from errors import NotFound, StoreUnavailable
from schemas import Link, LinkBioData, UserProfile

logger = logging.getLogger("linkbio.store")


def generate_id() -> str:
    return secrets.token_hex(6)


def seed_data() -> LinkBioData:
    profile = UserProfile(
        id=generate_id(),
        username="usuario",
        display_name="Criador de conteúdo",
        bio="Criador de conteúdo",
        avatar=f"https://avatars.githubusercontent.com/u/{secrets.randbelow(10**8)}",
        background_color="#1a1a1a",
        button_color="#00d632",
    )
    links = [
        Link(
            id=generate_id(),
            title="Instagram",
            url="https://instagram.com/usuario",
            is_active=True,
            icon="instagram",
            order=1,
        ),
        Link(
            id=generate_id(),
            title="YouTube",
            url="https://youtube.com/channel/usuario",
            is_active=True,
            icon="youtube",
            order=2,
        ),
        Link(
            id=generate_id(),
            title="Website",
            url="https://meusite.com",
            is_active=False,
            icon="globe",
            order=3,
        ),
    ]
    return LinkBioData(profile=profile, links=links)


class LinkBioStore:
    def __init__(self, data: Optional[LinkBioData] = None):
        data = data if data is not None else seed_data()
        self.available = True
        self._profile = data.profile.model_copy()
        self._links: Dict[str, Link] = {}
        self._issued_ids = set()
        for link in data.links:
            if link.id in self._links:
                raise ValueError(f"Duplicate link id: {link.id}")
            self._links[link.id] = link.model_copy()
            self._issued_ids.add(link.id)
        self._link_locks: Dict[str, asyncio.Lock] = {}
        self._profile_lock = asyncio.Lock()
        self._collection_lock = asyncio.Lock()

    def _ensure_available(self):
        if not self.available:
            logger.error("Store unavailable")
            raise StoreUnavailable()

    def _lock_for(self, link_id: str) -> asyncio.Lock:
        lock = self._link_locks.get(link_id)
        if lock is None:
            lock = self._link_locks[link_id] = asyncio.Lock()
        return lock

    def _allocate_id(self) -> str:
        # ids are never reused, even after deletion
        lid = generate_id()
        while lid in self._issued_ids:
            lid = generate_id()
        self._issued_ids.add(lid)
        return lid

    # ----------------------- Reads -----------------------

    async def get_profile(self) -> UserProfile:
        self._ensure_available()
        return self._profile.model_copy()

    async def list_links(self) -> List[Link]:
        self._ensure_available()
        return [link.model_copy() for link in self._links.values()]

    async def get_link(self, link_id: str) -> Link:
        self._ensure_available()
        link = self._links.get(link_id)
        if link is None:
            raise NotFound("link", link_id)
        return link.model_copy()

    # ----------------------- Writes -----------------------

    async def insert_link(self, fields: dict) -> Link:
        self._ensure_available()
        async with self._collection_lock:
            self._ensure_available()
            values = dict(fields)
            if values.get("order") is None:
                values["order"] = len(self._links) + 1
            link = Link(id=self._allocate_id(), **values)
            self._links[link.id] = link
        logger.info("Created link %s", link.id)
        return link.model_copy()

    async def update_link(self, link_id: str, changes: dict) -> Link:
        self._ensure_available()
        if link_id not in self._links:
            logger.debug("Update of missing link %s", link_id)
            raise NotFound("link", link_id)
        lock = self._lock_for(link_id)
        async with lock:
            self._ensure_available()
            current = self._links.get(link_id)
            if current is None:
                # deleted while waiting
                if self._link_locks.get(link_id) is lock:
                    del self._link_locks[link_id]
                raise NotFound("link", link_id)
            merged = current.model_copy(update=changes)
            self._links[link_id] = merged
        logger.info("Updated link %s (%s)", link_id, ", ".join(sorted(changes)) or "no changes")
        return merged.model_copy()

    async def delete_link(self, link_id: str) -> bool:
        self._ensure_available()
        async with self._collection_lock:
            async with self._lock_for(link_id):
                self._ensure_available()
                removed = self._links.pop(link_id, None)
            self._link_locks.pop(link_id, None)
        if removed is None:
            logger.debug("Delete of missing link %s ignored", link_id)
            return False
        logger.info("Deleted link %s", link_id)
        return True

    async def update_profile(self, changes: dict) -> UserProfile:
        self._ensure_available()
        async with self._profile_lock:
            self._ensure_available()
            self._profile = self._profile.model_copy(update=changes)
            profile = self._profile
        logger.info("Updated profile (%s)", ", ".join(sorted(changes)) or "no changes")
        return profile.model_copy()

    async def snapshot(self) -> LinkBioData:
        self._ensure_available()
        return LinkBioData(
            profile=self._profile.model_copy(),
            links=[link.model_copy() for link in self._links.values()],
        )
