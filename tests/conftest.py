"""
Shared fixtures: canned PokeAPI payloads served by a fake requests session.
"""
import sys
from pathlib import Path

import pytest
import requests

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from utils import pokeapi  # noqa: E402

BASE = "https://pokeapi.co/api/v2/"


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeAPI:
    """Stands in for pokeapi._session; unknown URLs answer 404."""

    def __init__(self, routes):
        self.routes = dict(routes)
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        value = self.routes.get(url)
        if value is None:
            return FakeResponse(404)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, FakeResponse):
            return value
        return FakeResponse(200, value)


def pokemon(name, species_id, abilities=(), types=()):
    return {
        "name": name,
        "sprites": {"front_default": f"https://img.example/{name}.png"},
        "abilities": [{"ability": {"name": a}} for a in abilities],
        "types": [{"type": {"name": t}} for t in types],
        "species": {"url": f"{BASE}pokemon-species/{species_id}/"},
    }


def node(name, min_level=None, evolves_to=(), details=None):
    if details is None:
        details = [] if min_level is None else [{"min_level": min_level, "trigger": {"name": "level-up"}}]
    return {
        "species": {"name": name},
        "evolution_details": details,
        "evolves_to": list(evolves_to),
    }


def charmander_routes():
    return {
        f"{BASE}pokemon/charmander/": pokemon("charmander", 4, ["blaze", "solar-power"], ["fire"]),
        f"{BASE}pokemon/charmeleon/": pokemon("charmeleon", 5, ["blaze"], ["fire"]),
        f"{BASE}pokemon/charizard/": pokemon("charizard", 6, ["blaze"], ["fire", "flying"]),
        f"{BASE}pokemon-species/4/": {"evolution_chain": {"url": f"{BASE}evolution-chain/2/"}},
        f"{BASE}evolution-chain/2/": {
            "chain": node("charmander", evolves_to=[
                node("charmeleon", 16, evolves_to=[node("charizard", 36)]),
            ]),
        },
    }


def eevee_routes():
    item = [{"min_level": None, "item": {"name": "water-stone"}, "trigger": {"name": "use-item"}}]
    return {
        f"{BASE}pokemon/eevee/": pokemon("eevee", 133, ["run-away", "adaptability"], ["normal"]),
        f"{BASE}pokemon/vaporeon/": pokemon("vaporeon", 134, ["water-absorb"], ["water"]),
        f"{BASE}pokemon/jolteon/": pokemon("jolteon", 135, ["volt-absorb"], ["electric"]),
        f"{BASE}pokemon-species/133/": {"evolution_chain": {"url": f"{BASE}evolution-chain/67/"}},
        f"{BASE}evolution-chain/67/": {
            "chain": node("eevee", evolves_to=[
                node("vaporeon", details=item),
                node("jolteon", details=item),
                node("flareon", details=item),
            ]),
        },
    }


@pytest.fixture
def fake_api(monkeypatch):
    """Install a FakeAPI with the charmander and eevee families; tests may edit .routes."""
    routes = charmander_routes()
    routes.update(eevee_routes())
    api = FakeAPI(routes)
    monkeypatch.setattr(pokeapi, "_session", api)
    return api
