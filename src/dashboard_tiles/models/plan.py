"""Launch plans: the resolved outcome of activating a tile."""

from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from dashboard_tiles.models.tile import ComponentName, IntentSpec, Tile, UserHandle


class NoOpReason(str, Enum):
    """Why an activation resolved to nothing."""

    NO_DESTINATION = "no_destination"
    UNRESOLVABLE_COMPONENT = "unresolvable_component"


class Direct(BaseModel):
    """Launch in the caller's own context with no explicit user."""

    model_config = ConfigDict(frozen=True)

    intent: IntentSpec
    component: ComponentName


class AsUser(BaseModel):
    """Launch as one specific profile."""

    model_config = ConfigDict(frozen=True)

    intent: IntentSpec
    component: ComponentName
    user_handle: UserHandle


class ChooseProfile(BaseModel):
    """More than one profile is eligible; the caller must pick one."""

    model_config = ConfigDict(frozen=True)

    tile: Tile
    intent: IntentSpec
    candidate_users: Tuple[UserHandle, ...]

    @field_validator("candidate_users")
    @classmethod
    def require_several(cls, v: Tuple[UserHandle, ...]) -> Tuple[UserHandle, ...]:
        if len(v) < 2:
            raise ValueError("ChooseProfile needs at least two candidate users")
        return v


class NoOp(BaseModel):
    """Nothing to launch."""

    model_config = ConfigDict(frozen=True)

    reason: NoOpReason = NoOpReason.NO_DESTINATION
    tile_title: Optional[str] = None


LaunchPlan = Union[Direct, AsUser, ChooseProfile, NoOp]
