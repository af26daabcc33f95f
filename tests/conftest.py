"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from app import create_app
from publication.models import EventRecord, TicketOrder, UserIdentity


def event_payload(event_id, start_date, timezone='Europe/London', title='An event', end_date=None):
    return {
        'id': event_id,
        'title': title,
        'start_date': start_date,
        'end_date': end_date or start_date,
        'timezone': timezone,
        'url': f'http://www.eventbrite.co.uk/event/{event_id}?ref=ebapi',
        'venue': {'name': 'The Venue', 'city': 'London'},
    }


def order_payload(order_id, event):
    return {
        'id': order_id,
        'tickets': [{'ticket': {'name': 'General Admission', 'quantity': 1}}],
        'event': event,
    }


def make_event(event_id, start_date, timezone='Europe/London', title='An event'):
    return EventRecord.from_api(event_payload(event_id, start_date, timezone, title), organizer=True)


def make_order(order_id, event_id, start_date, timezone='Europe/London', title='A ticketed event'):
    return TicketOrder.from_api(order_payload(order_id, event_payload(event_id, start_date, timezone, title)))


@pytest.fixture
def user() -> UserIdentity:
    return UserIdentity(user_id='42', first_name='Francis', last_name='Overton', email='francis@example.com')


@pytest.fixture
def gateway(user) -> Mock:
    gateway = Mock()
    gateway.fetch_user.return_value = user
    gateway.fetch_organized_events.return_value = []
    gateway.fetch_purchased_tickets.return_value = []
    return gateway


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'EVENTBRITE_APPLICATION_KEY': 'test-key',
        'EVENTBRITE_CLIENT_SECRET': 'test-client-secret',
        'EXCLUDE_PAST_EVENTS': False,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()
