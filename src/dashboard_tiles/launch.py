"""Launch resolution for activated tiles.

Given a tile and its intent, the resolver decides between a direct launch,
a launch as one specific profile, or deferring to a profile-selection step.
The resolver is pure: it keeps no per-launch state, so "retry" is simply
calling it again with updated input.

State machine (for logging only)::

    IDLE -> RESOLVING -> {DIRECT, AS_USER, CHOOSE_PROFILE} -> DISPATCHED
                      \\-> FAILED (surfaces as a NoOp plan)
"""

import logging
from enum import Enum
from typing import Callable, Collection, List, Optional, Protocol, Sequence

from dashboard_tiles.errors import (
    ProfileSelectionRequiredError,
    ProfileUnavailableError,
    UnresolvableComponentError,
)
from dashboard_tiles.metrics import ActivationLogger
from dashboard_tiles.models import (
    AsUser,
    ChooseProfile,
    ComponentName,
    Direct,
    IntentSpec,
    LaunchPlan,
    NoOp,
    NoOpReason,
    Tile,
    UserHandle,
)

logger = logging.getLogger(__name__)

ComponentLookup = Callable[[IntentSpec], Optional[ComponentName]]


class LaunchState(str, Enum):
    """Stages of a single activation."""

    IDLE = "idle"
    RESOLVING = "resolving"
    DIRECT = "direct"
    AS_USER = "as_user"
    CHOOSE_PROFILE = "choose_profile"
    DISPATCHED = "dispatched"
    FAILED = "failed"


class ActivityLauncher(Protocol):
    """Caller-side capability that actually starts an activity."""

    def start(self, intent: IntentSpec, user_handle: Optional[UserHandle]) -> None:
        """Start ``intent``, as ``user_handle`` when given.

        Raises whatever the platform raises; the resolver does not retry.
        """
        ...


def effective_intent(tile: Tile) -> Optional[IntentSpec]:
    """Copy of the tile intent with the declared action override applied.

    The copy is deep, so extras mutated on a plan never reach the tile.
    """
    if tile.intent is None:
        return None
    if tile.intent_action is not None:
        return tile.intent.with_action(tile.intent_action)
    return tile.intent.model_copy(deep=True)


def state_of(plan: LaunchPlan) -> LaunchState:
    if isinstance(plan, Direct):
        return LaunchState.DIRECT
    if isinstance(plan, AsUser):
        return LaunchState.AS_USER
    if isinstance(plan, ChooseProfile):
        return LaunchState.CHOOSE_PROFILE
    return LaunchState.FAILED


class LaunchResolver:
    """Resolves tile activations into launch plans.

    Example:
        >>> resolver = LaunchResolver(metrics, caller_user=UserHandle(identifier=0))
        >>> plan = resolver.resolve(tile)
        >>> if isinstance(plan, ChooseProfile):
        ...     plan = resolver.resolve_for_user(plan.tile, chosen, plan.intent)
        >>> resolver.dispatch(plan, launcher)
    """

    def __init__(
        self,
        activation_logger: ActivationLogger,
        caller_user: Optional[UserHandle] = None,
        component_lookup: Optional[ComponentLookup] = None,
        active_users: Optional[Callable[[], Collection[UserHandle]]] = None,
    ):
        """Initialize resolver.

        Args:
            activation_logger: Receives one record per dispatched launch
            caller_user: User the caller runs as; None when unknown
            component_lookup: Resolves action-only intents to a component
            active_users: Users currently present on the device, used to
                drop stale eligible handles
        """
        self.activation_logger = activation_logger
        self.caller_user = caller_user
        self.component_lookup = component_lookup
        self.active_users = active_users

    def resolve_component(self, intent: IntentSpec) -> Optional[ComponentName]:
        if intent.component is not None:
            return intent.component
        if self.component_lookup is not None:
            return self.component_lookup(intent)
        return None

    def candidate_users(self, tile: Tile) -> List[UserHandle]:
        """Users the tile may be launched as, in declaration order."""
        handles = list(tile.eligible_user_handles)

        if handles and self.active_users is not None:
            active = set(self.active_users())
            pruned = [h for h in handles if h in active]
            if len(pruned) != len(handles):
                logger.debug(f"Dropped {len(handles) - len(pruned)} stale user handle(s) for '{tile.title}'")
            handles = pruned

        if handles:
            return handles
        if self.caller_user is not None:
            return [self.caller_user]
        return []

    def plan_for_candidates(
        self,
        tile: Tile,
        intent: IntentSpec,
        component: ComponentName,
        candidates: Sequence[UserHandle],
    ) -> LaunchPlan:
        """Pick the plan variant from the number of candidate users."""
        if len(candidates) == 0:
            return Direct(intent=intent, component=component)
        if len(candidates) == 1:
            return AsUser(intent=intent, component=component, user_handle=candidates[0])
        return ChooseProfile(tile=tile, intent=intent, candidate_users=tuple(candidates))

    def resolve(self, tile: Tile, intent: Optional[IntentSpec] = None) -> LaunchPlan:
        """Resolve an activation of ``tile``.

        Args:
            tile: Activated tile
            intent: Intent to launch; defaults to the tile's own intent with
                its action override applied

        Returns:
            Exactly one launch plan
        """
        logger.debug(f"'{tile.title}': {LaunchState.IDLE.value} -> {LaunchState.RESOLVING.value}")
        if intent is None:
            intent = effective_intent(tile)
        else:
            intent = intent.model_copy(deep=True)
        if intent is None:
            logger.debug(f"Tile '{tile.title}' has no intent, nothing to launch")
            return NoOp(reason=NoOpReason.NO_DESTINATION, tile_title=tile.title)

        component = self.resolve_component(intent)
        if component is None:
            logger.debug(f"No component resolves for tile '{tile.title}' (action={intent.action})")
            return NoOp(reason=NoOpReason.UNRESOLVABLE_COMPONENT, tile_title=tile.title)

        plan = self.plan_for_candidates(tile, intent, component, self.candidate_users(tile))
        logger.debug(f"Resolved '{tile.title}' -> {state_of(plan).value}")
        return plan

    def resolve_for_user(
        self, tile: Tile, user: UserHandle, intent: Optional[IntentSpec] = None
    ) -> LaunchPlan:
        """Re-resolve after a profile-selection step picked ``user``.

        Raises:
            ProfileUnavailableError: ``user`` is no longer active on the device
        """
        if self.active_users is not None and user not in set(self.active_users()):
            raise ProfileUnavailableError(user, tile.title)
        return self.resolve(tile.with_user_handles([user]), intent)

    def report_dispatched(self, plan: LaunchPlan) -> bool:
        """Record a successfully dispatched plan with the activation logger.

        Only Direct and AsUser plans are recorded. A logger failure is
        logged and never affects the caller.

        Returns:
            True if a record was emitted
        """
        if not isinstance(plan, (Direct, AsUser)):
            return False

        component_name = plan.component.flatten_to_short_string()
        try:
            self.activation_logger.record_launch(component_name)
        except Exception as e:
            logger.warning(f"Activation logger failed for {component_name}: {e}", exc_info=True)
        return True

    def dispatch(self, plan: LaunchPlan, launcher: ActivityLauncher) -> bool:
        """Execute ``plan`` through ``launcher`` and report it.

        Returns:
            True if an activity was started, False for a no-destination NoOp

        Raises:
            UnresolvableComponentError: The plan's target could not be resolved
            ProfileSelectionRequiredError: The plan still needs a profile choice
        """
        if isinstance(plan, NoOp):
            if plan.reason == NoOpReason.UNRESOLVABLE_COMPONENT:
                raise UnresolvableComponentError(plan.tile_title or "unknown")
            return False

        if isinstance(plan, ChooseProfile):
            raise ProfileSelectionRequiredError(
                f"Tile '{plan.tile.title}' has {len(plan.candidate_users)} eligible profiles"
            )

        user = plan.user_handle if isinstance(plan, AsUser) else None
        launcher.start(plan.intent, user)
        logger.info(f"Dispatched {plan.component.flatten_to_short_string()} ({LaunchState.DISPATCHED.value}, user={user})")
        self.report_dispatched(plan)
        return True
