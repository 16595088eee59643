# utils/lineage.py
# Resolve a pokemon and one evolution path through chained PokeAPI lookups

from typing import Iterator, Optional, Tuple

import requests

from utils import pokeapi
from utils.errors import NotFoundError, ResolutionError, ValidationError
from utils.logger import log_action, log_verbose
from utils.models import Entity, EvolutionStage, Resolution

# what a bad hop can raise: transport/status, bad JSON, or a payload missing fields
_HOP_ERRORS = (requests.RequestException, ValueError, KeyError, IndexError, TypeError, AttributeError)


def _min_level(chain_node: dict) -> Optional[int]:
    details = chain_node["evolution_details"]
    if not details:
        return None
    # item/friendship evolutions carry a null level; 0 is never a real one
    return details[0].get("min_level") or None


def iter_first_branch(chain_node: dict) -> Iterator[Tuple[str, Optional[int]]]:
    """
    Walk an evolution chain root-first, yielding (species name, min level).
    Only evolves_to[0] is followed at each node; sibling branches are skipped.
    """
    node = chain_node
    while node:
        yield node["species"]["name"], _min_level(node)
        children = node["evolves_to"]
        node = children[0] if children else None


async def _fetch_entity(name: str) -> dict:
    try:
        data = await pokeapi.fetch_pokemon(name)
    except (requests.RequestException, ValueError) as e:
        log_action(f"ERROR fetching pokemon {name}: {e}")
        raise ResolutionError(f"pokemon lookup for '{name}' failed: {e}") from e
    if data is None:
        raise NotFoundError(name)
    return data


async def _build_lineage(entity_json: dict) -> Tuple[EvolutionStage, ...]:
    species = await pokeapi.fetch_species(entity_json)
    chain = await pokeapi.fetch_evolution_chain(species)

    stages = []
    # one stage lookup at a time, in traversal order
    for stage_name, min_level in iter_first_branch(chain):
        stage_json = await pokeapi.fetch_pokemon(stage_name)
        if stage_json is None:
            raise ResolutionError(f"evolution stage '{stage_name}' not found")
        stages.append(EvolutionStage(
            name=stage_name,
            sprite_url=stage_json["sprites"]["front_default"],
            min_level=min_level,
        ))
        log_verbose(f"stage {len(stages)}: {stage_name} (min level {min_level})")
    if not stages:
        raise ResolutionError("evolution chain has no root species")
    return tuple(stages)


async def resolve(name: str) -> Resolution:
    """
    Look up `name` and the first path of its evolution chain.

    Raises ValidationError for an empty query (before any request),
    NotFoundError when the pokemon itself does not exist, and
    ResolutionError for every other failure. Nothing partial is returned.
    """
    if not name or not name.strip():
        raise ValidationError("empty pokemon name")

    query = name.strip().lower()
    entity_json = await _fetch_entity(query)

    try:
        entity = Entity.from_payload(entity_json)
        lineage = await _build_lineage(entity_json)
    except ResolutionError as e:
        log_action(f"ERROR resolving {query}: {e}")
        raise
    except _HOP_ERRORS as e:
        log_action(f"ERROR resolving {query}: {type(e).__name__}: {e}")
        raise ResolutionError(f"could not resolve evolution chain for '{query}'") from e

    log_action(f"Resolved {entity.name} ({len(lineage)} stages)")
    return Resolution(entity=entity, lineage=lineage)
