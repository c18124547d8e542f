"""Pending special effects and their resolutions.

Effects are queued when certain ranks are played and must be resolved, head
first, before normal turns resume. Each variant carries only the fields it
needs; ``kind`` discriminates both unions.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TransferEffect(BaseModel, frozen=True):
    """Owner hands ``remaining`` cards to the target seat (7渡し)."""

    kind: Literal["transfer"] = "transfer"
    owner_id: int
    target_id: int
    remaining: int


class DiscardEffect(BaseModel, frozen=True):
    """Owner permanently discards ``remaining`` cards (10捨て)."""

    kind: Literal["discard"] = "discard"
    owner_id: int
    remaining: int


class MassDiscardEffect(BaseModel, frozen=True):
    """Owner declares up to ``remaining`` ranks every seat loses (Qボンバー)."""

    kind: Literal["mass_discard"] = "mass_discard"
    owner_id: int
    remaining: int


PendingEffect = Annotated[
    Union[TransferEffect, DiscardEffect, MassDiscardEffect],
    Field(discriminator="kind"),
]


class SkipResolution(BaseModel, frozen=True):
    """Drop the head effect without acting on it."""

    kind: Literal["skip"] = "skip"
    player_id: int


class TransferResolution(BaseModel, frozen=True):
    kind: Literal["transfer"] = "transfer"
    player_id: int
    card_ids: tuple[str, ...] = ()


class DiscardResolution(BaseModel, frozen=True):
    kind: Literal["discard"] = "discard"
    player_id: int
    card_ids: tuple[str, ...] = ()


class MassDiscardResolution(BaseModel, frozen=True):
    kind: Literal["mass_discard"] = "mass_discard"
    player_id: int
    ranks: tuple[int, ...] = ()


EffectResolution = Annotated[
    Union[SkipResolution, TransferResolution, DiscardResolution, MassDiscardResolution],
    Field(discriminator="kind"),
]
