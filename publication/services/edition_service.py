#!/usr/bin/env python3
"""
Edition assembly - pick the events and tickets to print for one delivery
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Set

from ..models import Edition, EditionResult, EventRecord, NoContent, TicketOrder
from ..utils.date_utils import delivery_window, starts_tomorrow
from .eventbrite_gateway import EventbriteGateway

logger = logging.getLogger(__name__)


class EditionService:
    """Builds an Edition from a user's Eventbrite data"""

    def __init__(self, gateway_factory: Callable[[str], EventbriteGateway], exclude_past: bool = False):
        self.gateway_factory = gateway_factory
        self.exclude_past = exclude_past

    def assemble(self, access_token: str, local_delivery_time: str) -> EditionResult:
        """
        Fetch the user's data and keep what starts the day after delivery

        Returns NoContent if the user has no events or tickets at all.
        Raises UpstreamError if any fetch fails, InvalidParameter for a bad
        delivery time.
        """
        # The user fetch must succeed before the list calls are made
        user = self.gateway_factory(access_token).fetch_user()

        # Each thread gets its own gateway, and so its own requests.Session
        events_gateway = self.gateway_factory(access_token)
        tickets_gateway = self.gateway_factory(access_token)
        with ThreadPoolExecutor(max_workers=2) as executor:
            events_future = executor.submit(events_gateway.fetch_organized_events)
            tickets_future = executor.submit(tickets_gateway.fetch_purchased_tickets)
            event_data = events_future.result()
            ticket_data = tickets_future.result()

        if not event_data and not ticket_data:
            logger.info(f"No events or tickets for user {user.user_id}")
            return NoContent(user=user)

        window = delivery_window(local_delivery_time)

        events: List[EventRecord] = []
        event_ids: Set[str] = set()
        for event in event_data:
            if self._qualifies(window, event):
                events.append(event)
                event_ids.add(event.id)

        tickets: List[TicketOrder] = []
        for order in ticket_data:
            # Organized events take precedence over tickets for the same event
            if self._qualifies(window, order.event) and order.event.id not in event_ids:
                tickets.append(order)

        logger.info(
            f"Edition for user {user.user_id}: {len(events)} of {len(event_data)} events, "
            f"{len(tickets)} of {len(ticket_data)} tickets"
        )
        return Edition(user=user, events=events, tickets=tickets)

    def _qualifies(self, window, event: EventRecord) -> bool:
        try:
            return starts_tomorrow(window, event.start_date, event.timezone, exclude_past=self.exclude_past)
        except (ValueError, TypeError) as e:
            logger.warning(f"Skipping event {event.id}: {e}")
            return False
