"""
Unit of Work

One `transaction.atomic()` block per use case. Domain events raised by the
aggregates touched inside the block reach the message bus only after the
outermost transaction commits; a rollback drops them.
"""

from typing import List
import logging

from django.db import transaction  # type: ignore

from shared.domain.base import Aggregate, DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Usage:
        with DjangoUnitOfWork() as uow:
            state = row.to_domain()
            approve(state, session, scheduled_date=when)
            uow.collect_events(state)
            row.apply_state(state)
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._atomic = transaction.atomic()

    def __enter__(self):
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            events, self._events = self._events, []
            if events:
                transaction.on_commit(lambda: self._publish(events))
        else:
            logger.warning(f"Use case failed, dropping {len(self._events)} pending events")
            self._events = []
        return self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def collect_events(self, aggregate: Aggregate) -> None:
        """Move the aggregate's pending events into this unit of work."""
        events = aggregate.events
        if not events:
            return
        self._events.extend(events)
        aggregate.clear_events()
        logger.debug(f"Collected {len(events)} events from {type(aggregate).__name__} {aggregate.id}")

    @staticmethod
    def _publish(events: List[DomainEvent]) -> None:
        from shared.application.message_bus import message_bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        try:
            message_bus.publish_events(events)
        except Exception as e:
            # Already committed, so delivery failures are only logged
            logger.error(f"Error publishing events: {e}", exc_info=True)
