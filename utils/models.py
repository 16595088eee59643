# utils/models.py
# Display-ready records built from PokeAPI payloads

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Entity:
    """The searched pokemon: name, sprite, abilities and types in API order."""
    name: str
    sprite_url: Optional[str]
    abilities: Tuple[str, ...] = field(default_factory=tuple)
    types: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, data: dict) -> "Entity":
        # KeyError/TypeError on a malformed payload is left to the caller
        return cls(
            name=data["name"],
            sprite_url=data["sprites"]["front_default"],
            abilities=tuple(a["ability"]["name"] for a in data["abilities"]),
            types=tuple(t["type"]["name"] for t in data["types"]),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sprite_url": self.sprite_url,
            "abilities": list(self.abilities),
            "types": list(self.types),
        }


@dataclass(frozen=True)
class EvolutionStage:
    name: str
    sprite_url: Optional[str]
    min_level: Optional[int] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "sprite_url": self.sprite_url, "min_level": self.min_level}


Lineage = Tuple[EvolutionStage, ...]


@dataclass(frozen=True)
class Resolution:
    """Successful outcome of a lookup: the entity plus one evolution path."""
    entity: Entity
    lineage: Lineage

    def to_dict(self) -> dict:
        return {
            "entity": self.entity.to_dict(),
            "lineage": [s.to_dict() for s in self.lineage],
        }
