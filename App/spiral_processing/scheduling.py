"""Latest-wins scheduling of renders for interactive callers.

AIDEV-NOTE: At most one render runs at a time. Requests that arrive while a
render is in flight replace a single pending slot, and a finished render is
only published if no newer request exists. This keeps two renders' outputs
from ever interleaving in the UI.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

JobT = TypeVar("JobT")


@dataclass(frozen=True)
class RenderTicket(Generic[JobT]):
    """A render request tagged with its generation number."""

    generation: int
    job: JobT


class RenderQueue(Generic[JobT]):
    """Coordinates render requests so only the newest result is published."""

    def __init__(self):
        self._generation = 0
        self._in_flight: Optional[RenderTicket[JobT]] = None
        self._pending: Optional[RenderTicket[JobT]] = None

    @property
    def busy(self) -> bool:
        return self._in_flight is not None

    @property
    def latest_generation(self) -> int:
        return self._generation

    def submit(self, job: JobT) -> Optional[RenderTicket[JobT]]:
        """Register a new render request.

        Returns:
            Ticket to start right away, or None if a render is already running
            (the request is then kept as the pending one)
        """
        self._generation += 1
        ticket = RenderTicket(self._generation, job)
        if self._in_flight is None:
            self._in_flight = ticket
            return ticket
        self._pending = ticket
        return None

    def complete(
        self, generation: int
    ) -> "tuple[bool, Optional[RenderTicket[JobT]]]":
        """Mark the in-flight render as finished (successfully or not).

        Args:
            generation: Generation of the render that finished

        Returns:
            Tuple of (publish: bool, next ticket to start or None)
        """
        if self._in_flight is None or self._in_flight.generation != generation:
            # Unknown or already superseded render, nothing to publish
            return False, None

        publish = generation == self._generation
        self._in_flight = self._pending
        self._pending = None
        return publish, self._in_flight

    def clear(self):
        """Forget pending work; a running render will not be published."""
        self._pending = None
        self._generation += 1
