from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from config import Settings
from database import LinkBioStore
from main import create_app
from schemas import Link, LinkBioData, UserProfile
from service import LinkBioService


def make_data() -> LinkBioData:
    return LinkBioData(
        profile=UserProfile(
            id="p1",
            username="usuario",
            display_name="Criador de conteúdo",
            bio="Criador de conteúdo",
            avatar="https://avatars.githubusercontent.com/u/1",
            background_color="#1a1a1a",
            button_color="#00d632",
        ),
        links=[
            Link(id="a", title="Instagram", url="https://instagram.com/usuario", is_active=True, icon="instagram", order=1),
            Link(id="b", title="Website", url="https://meusite.com", is_active=False, icon="globe", order=2),
        ],
    )


@pytest.fixture
def store() -> LinkBioStore:
    """Store seeded with links a (active) and b (inactive)."""
    return LinkBioStore(make_data())


@pytest.fixture
def service(store: LinkBioStore) -> LinkBioService:
    """Service over the test store, latency disabled."""
    return LinkBioService(store=store, latency_scale=0)


@pytest.fixture
def app(service: LinkBioService) -> FastAPI:
    return create_app(service=service, settings=Settings(latency_scale=0))


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
