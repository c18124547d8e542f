"""Turn actions."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class PlayAction(BaseModel, frozen=True):
    """Play the named cards from hand."""

    kind: Literal["play"] = "play"
    player_id: int
    card_ids: tuple[str, ...]


class PassAction(BaseModel, frozen=True):
    """Decline to play this turn."""

    kind: Literal["pass"] = "pass"
    player_id: int


Action = Annotated[Union[PlayAction, PassAction], Field(discriminator="kind")]
