"""NegotiationStateMachine class with trigger, history, and valid_events."""

from __future__ import annotations

from marketplace.domain.errors import InvalidTransitionError
from marketplace.domain.types import NegotiationStatus
from marketplace.state_machine.transitions import TERMINAL_STATES, TRANSITIONS


class NegotiationStateMachine:
    """Finite state machine governing a seller-side negotiation.

    Tracks the current status, validates transitions against the transition
    map, and records the history of all status changes.

    Usage::

        sm = NegotiationStateMachine()
        sm.trigger("counter")   # -> COUNTERED
        sm.trigger("accept")    # -> ACCEPTED (terminal)
    """

    def __init__(
        self,
        initial_state: NegotiationStatus = NegotiationStatus.PENDING,
    ) -> None:
        self._state: NegotiationStatus = initial_state
        self._history: list[tuple[NegotiationStatus, str, NegotiationStatus]] = []

    @property
    def state(self) -> NegotiationStatus:
        """Return the current negotiation status."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Return True if the machine is accepted, rejected, or expired."""
        return self._state in TERMINAL_STATES

    @property
    def history(self) -> list[tuple[NegotiationStatus, str, NegotiationStatus]]:
        """Return a copy of the ``(from_state, event, to_state)`` history."""
        return list(self._history)

    def trigger(self, event: str) -> NegotiationStatus:
        """Apply an event to the current status and transition.

        Args:
            event: The event string (e.g. ``"counter"``).

        Returns:
            The new status after the transition.

        Raises:
            InvalidTransitionError: If the transition is not allowed from
                the current status, or if the machine is in a terminal state.
        """
        if self.is_terminal:
            raise InvalidTransitionError(self._state, event)

        key = (self._state, event)
        if key not in TRANSITIONS:
            raise InvalidTransitionError(self._state, event)

        old_state = self._state
        new_state = TRANSITIONS[key]
        self._history.append((old_state, event, new_state))
        self._state = new_state
        return new_state

    def get_valid_events(self) -> list[str]:
        """Return a sorted list of events valid from the current status."""
        if self.is_terminal:
            return []
        return sorted(event for state, event in TRANSITIONS if state == self._state)
