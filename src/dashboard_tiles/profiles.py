"""Profile selection and end-to-end activation.

When more than one profile may open a tile, the caller shows a selection
step. That step is injected as a ``ProfileSelector``; the controller awaits
it, re-resolves with the chosen profile and dispatches.
"""

import logging
from typing import Optional, Protocol, Sequence, Union

from dashboard_tiles.binder import FragmentNavigation
from dashboard_tiles.launch import ActivityLauncher, LaunchResolver
from dashboard_tiles.models import (
    ChooseProfile,
    DisplayItem,
    LaunchPlan,
    Tile,
    UserHandle,
)

logger = logging.getLogger(__name__)

ActivationResult = Union[LaunchPlan, FragmentNavigation]


class ProfileSelector(Protocol):
    """Caller-side profile-selection step."""

    async def present(self, candidates: Sequence[UserHandle]) -> Optional[UserHandle]:
        """Let the user pick one of ``candidates``.

        Returns:
            The selected handle, or None when the step was abandoned
        """
        ...


class ActivationController:
    """Drives an activation from tap to dispatched launch."""

    def __init__(
        self,
        resolver: LaunchResolver,
        launcher: ActivityLauncher,
        selector: ProfileSelector,
    ):
        """Initialize controller.

        Args:
            resolver: Launch resolver
            launcher: Starts resolved intents
            selector: Presents the profile-selection step
        """
        self.resolver = resolver
        self.launcher = launcher
        self.selector = selector

    async def activate(self, target: Union[DisplayItem, Tile]) -> Optional[ActivationResult]:
        """Activate a display item or a tile.

        Returns:
            The dispatched plan, a fragment navigation request for in-place
            screens, or None when profile selection was abandoned

        Raises:
            UnresolvableComponentError: Nothing can open the tile
            ProfileUnavailableError: The selected profile is no longer active
        """
        if isinstance(target, DisplayItem):
            result = target.activate()
            if isinstance(result, FragmentNavigation):
                return result
        else:
            result = self.resolver.resolve(target)

        return await self.complete(result)

    async def complete(self, plan: LaunchPlan) -> Optional[LaunchPlan]:
        """Finish a resolved plan, asking for a profile when needed."""
        if isinstance(plan, ChooseProfile):
            selected = await self.selector.present(plan.candidate_users)
            if selected is None:
                logger.info(f"Profile selection abandoned for '{plan.tile.title}'")
                return None
            if selected not in plan.candidate_users:
                raise ValueError(f"Selected {selected} is not a candidate for '{plan.tile.title}'")
            plan = self.resolver.resolve_for_user(plan.tile, selected, plan.intent)

        self.resolver.dispatch(plan, self.launcher)
        return plan
