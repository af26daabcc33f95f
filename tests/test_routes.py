"""Integration tests for the publication endpoints."""

from datetime import date
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests
from requests_oauthlib import OAuth2Session

from conftest import make_event, make_order
from publication.errors import UpstreamError
from publication.services.cache_service import compute_validator

EDITION_URL = '/edition/?access_token=tok&local_delivery_time=2013-06-25T09:00:00%2B0100'


@pytest.fixture
def patched_gateway(gateway):
    with patch('publication.routes.publication_routes.EventbriteGateway', return_value=gateway) as factory:
        yield factory


class TestConfigure:

    def test_missing_return_url(self, client):
        response = client.get('/configure/')
        assert response.status_code == 400
        assert response.get_data(as_text=True) == 'No return_url parameter was provided'

    def test_redirects_to_eventbrite(self, client):
        response = client.get('/configure/?return_url=http://berg/return')

        assert response.status_code == 302
        location = urlparse(response.headers['Location'])
        assert location.netloc == 'www.eventbrite.com'
        assert parse_qs(location.query)['redirect_uri'] == ['http://localhost/return/']


class TestReturn:

    def test_missing_code(self, client):
        response = client.get('/return/')
        assert response.status_code == 500
        assert response.get_data(as_text=True) == 'No code was returned by Eventbrite'

    def test_full_round_trip(self, client):
        client.get('/configure/?return_url=http://berg/return&error_url=http://berg/error')

        with patch.object(OAuth2Session, 'fetch_token', return_value={'access_token': 'tok123'}):
            response = client.get('/return/?code=abc')

        assert response.status_code == 302
        location = urlparse(response.headers['Location'])
        assert location.netloc == 'berg'
        assert parse_qs(location.query) == {'config[access_token]': ['tok123']}

    def test_clients_keep_their_own_return_url(self, app):
        first = app.test_client()
        second = app.test_client()
        first.get('/configure/?return_url=http://first/return')
        second.get('/configure/?return_url=http://second/return')

        with patch.object(OAuth2Session, 'fetch_token', return_value={'access_token': 'tok123'}):
            second_response = second.get('/return/?code=abc')
            first_response = first.get('/return/?code=def')

        assert urlparse(first_response.headers['Location']).netloc == 'first'
        assert urlparse(second_response.headers['Location']).netloc == 'second'

    def test_exchange_failure(self, client):
        client.get('/configure/?return_url=http://berg/return')

        with patch.object(OAuth2Session, 'fetch_token', side_effect=requests.Timeout('slow')):
            response = client.get('/return/?code=abc')

        assert response.status_code == 401
        assert 'authenticate with Eventbrite' in response.get_data(as_text=True)


class TestEdition:

    def test_missing_access_token(self, client):
        response = client.get('/edition/?local_delivery_time=2013-06-25T09:00:00%2B0100')
        assert response.status_code == 401
        assert response.get_data(as_text=True) == 'No access_token received'

    def test_missing_delivery_time(self, client, patched_gateway):
        response = client.get('/edition/?access_token=tok')
        assert response.status_code == 400
        patched_gateway.assert_not_called()

    def test_no_events_or_tickets(self, client, patched_gateway, user):
        response = client.get(EDITION_URL)

        assert response.status_code == 204
        assert response.get_etag()[0] == compute_validator(user.identity_key, date.today())

    def test_renders_tomorrows_items(self, client, patched_gateway, gateway, user):
        gateway.fetch_organized_events.return_value = [make_event(1, '2013-06-26 10:00:00', title='Letterpress Workshop')]
        gateway.fetch_purchased_tickets.return_value = [
            make_order(100, 1, '2013-06-26 10:00:00', title='Letterpress Workshop'),
            make_order(101, 2, '2013-06-28 10:00:00', title='Much Later Gig'),
        ]

        response = client.get(EDITION_URL)

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'Letterpress Workshop' in body
        assert 'Much Later Gig' not in body
        assert "organising 1 event" in body
        assert response.get_etag()[0] == compute_validator(user.identity_key, date.today())
        assert patched_gateway.call_count == 3
        assert patched_gateway.call_args[0][0] == 'tok'

    def test_matching_etag_returns_304(self, client, patched_gateway, gateway, user):
        gateway.fetch_organized_events.return_value = [make_event(1, '2013-06-26 10:00:00')]
        validator = compute_validator(user.identity_key, date.today())

        response = client.get(EDITION_URL, headers={'If-None-Match': f'"{validator}"'})

        assert response.status_code == 304

    def test_upstream_failure(self, client, patched_gateway, gateway):
        gateway.fetch_organized_events.side_effect = UpstreamError(
            "Something went wrong fetching events for the user: Authentication Error"
        )

        response = client.get(EDITION_URL)

        assert response.status_code == 500
        assert response.get_data(as_text=True).startswith('Something went wrong fetching events')


class TestMisc:

    def test_favicon_is_gone(self, client):
        assert client.get('/favicon.ico').status_code == 410

    def test_validate_config(self, client):
        response = client.post('/validate_config/')
        assert response.status_code == 200
        assert response.get_data(as_text=True) == ''

    def test_sample(self, client):
        response = client.get('/sample/')
        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'Summer Letterpress Workshop' in body
        assert 'Open Data Breakfast' in body
        assert response.get_etag()[0] == compute_validator('sample', date.today())
