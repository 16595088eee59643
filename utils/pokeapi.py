import asyncio
from urllib.parse import quote

import requests

from utils.logger import log_action, log_verbose

API_BASE = "https://pokeapi.co/api/v2/"
POKEMON_API = f"{API_BASE}pokemon/"

# None waits forever, same as a browser fetch
REQUEST_TIMEOUT = None

# Shared HTTP session, no retries: a failed call fails the lookup
_session = requests.Session()


def pokemon_url(name_or_id) -> str:
    # one path segment: quote leaves dots alone, and ".." would climb out of pokemon/
    segment = quote(str(name_or_id).strip().lower(), safe="").replace(".", "%2E")
    return f"{POKEMON_API}{segment}/"


def get_json(url: str):
    """GET a resource; raises requests.HTTPError on a non-success status."""
    log_verbose(f"GET {url}")
    res = _session.get(url, timeout=REQUEST_TIMEOUT)
    res.raise_for_status()
    return res.json()


def get_pokemon(name_or_id):
    """Pokemon payload, or None when the service does not answer 200."""
    url = pokemon_url(name_or_id)
    log_verbose(f"GET {url}")
    res = _session.get(url, timeout=REQUEST_TIMEOUT)
    if res.status_code != 200:
        log_action(f"pokemon lookup {url} returned HTTP {res.status_code}")
        return None
    return res.json()


def get_species(pokemon_json):
    return get_json(pokemon_json["species"]["url"])


def get_evolution_chain(species_json):
    """Root node of the species' evolution chain."""
    evo_chain_url = species_json["evolution_chain"]["url"]
    return get_json(evo_chain_url)["chain"]


# --------------------------------------------------------------------------- #
# Async front: each call suspends the caller while requests runs on a worker
# thread, so lookups stay strictly sequential and the event loop stays free.
# --------------------------------------------------------------------------- #

async def fetch_pokemon(name_or_id):
    return await asyncio.to_thread(get_pokemon, name_or_id)


async def fetch_species(pokemon_json):
    return await asyncio.to_thread(get_species, pokemon_json)


async def fetch_evolution_chain(species_json):
    return await asyncio.to_thread(get_evolution_chain, species_json)
