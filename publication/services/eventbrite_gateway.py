#!/usr/bin/env python3
"""
Eventbrite API access for one authenticated user

Eventbrite reports "no results" for list calls as an error payload, e.g.
{"error": {"error_type": "Not Found", "error_message": "No events found ..."}}.
Those are treated as empty lists; every other error is fatal.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..errors import UpstreamError
from ..models import EventRecord, FetchOutcome, TicketOrder, UserIdentity

logger = logging.getLogger(__name__)

NO_RESULTS_ERROR_TYPE = 'Not Found'


def classify(payload: Any) -> FetchOutcome:
    """Decide whether an Eventbrite response is data, an empty result, or a failure"""
    if not isinstance(payload, dict):
        return FetchOutcome.FAILED

    error = payload.get('error')
    if error is None:
        return FetchOutcome.OK
    if isinstance(error, dict) and error.get('error_type') == NO_RESULTS_ERROR_TYPE:
        return FetchOutcome.EMPTY
    return FetchOutcome.FAILED


def describe_error(payload: Any) -> str:
    """Readable summary of an Eventbrite error payload"""
    error = payload.get('error') if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return f"{error.get('error_type', 'Error')}: {error.get('error_message', '')}".strip()
    return str(error or payload)


class EventbriteGateway:
    """Read-only calls against the Eventbrite API, authenticated by an access token"""

    def __init__(self, access_token: str, api_url: str, timeout: int = 30,
                 session: Optional[requests.Session] = None):
        self.api_url = api_url if api_url.endswith('/') else api_url + '/'
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {access_token}',
            'Accept': 'application/json'
        })

    def _call(self, method: str, params: Optional[Dict[str, Any]] = None):
        """Make one API request and return (payload, outcome)"""
        url = f"{self.api_url}{method}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to Eventbrite {method} failed: {e}")
            raise UpstreamError(f"Request to Eventbrite failed: {e}")

        try:
            payload = response.json()
        except ValueError:
            logger.error(f"Eventbrite {method} returned non-JSON response, status {response.status_code}")
            raise UpstreamError(f"Unexpected response from Eventbrite (status {response.status_code})")

        outcome = classify(payload)
        if outcome == FetchOutcome.OK and not response.ok:
            outcome = FetchOutcome.FAILED
        return payload, outcome

    def fetch_user(self) -> UserIdentity:
        """Fetch the authenticated user; every failure is fatal"""
        payload, outcome = self._call('user_get')
        if outcome != FetchOutcome.OK:
            raise UpstreamError(f"Something went wrong fetching the user's data: {describe_error(payload)}")

        try:
            user = UserIdentity.from_api(payload['user'])
        except (KeyError, TypeError) as e:
            raise UpstreamError(f"Something went wrong fetching the user's data: missing {e}")

        logger.info(f"Fetched Eventbrite user {user.user_id}")
        return user

    def fetch_organized_events(self) -> List[EventRecord]:
        """Fetch events the user organizes, in Eventbrite's order"""
        payload, outcome = self._call('user_list_events', {'do_not_display': 'style,tickets'})
        if outcome == FetchOutcome.EMPTY:
            logger.info("No organized events for user")
            return []
        if outcome == FetchOutcome.FAILED:
            raise UpstreamError(f"Something went wrong fetching events for the user: {describe_error(payload)}")

        try:
            events = [EventRecord.from_api(item['event'], organizer=True) for item in payload.get('events') or []]
        except (KeyError, TypeError) as e:
            raise UpstreamError(f"Something went wrong fetching events for the user: missing {e}")

        logger.info(f"Fetched {len(events)} organized events")
        return events

    def fetch_purchased_tickets(self) -> List[TicketOrder]:
        """Fetch the user's ticket orders, in Eventbrite's order"""
        payload, outcome = self._call('user_list_tickets', {'type': 'all'})
        if outcome == FetchOutcome.EMPTY:
            logger.info("No ticket orders for user")
            return []
        if outcome == FetchOutcome.FAILED:
            raise UpstreamError(f"Something went wrong fetching tickets for the user: {describe_error(payload)}")

        try:
            orders = [TicketOrder.from_api(item['order']) for item in self._order_entries(payload)]
        except (KeyError, TypeError) as e:
            raise UpstreamError(f"Something went wrong fetching tickets for the user: missing {e}")

        logger.info(f"Fetched {len(orders)} ticket orders")
        return orders

    @staticmethod
    def _order_entries(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        # user_tickets is a list of sections; the orders live in the one with an 'orders' key
        sections = payload.get('user_tickets') or []
        if isinstance(sections, dict):
            sections = [sections]
        for section in sections:
            if isinstance(section, dict) and 'orders' in section:
                return section['orders'] or []
        return []
