"""
Publication Routes - OAuth configuration, edition and sample endpoints
"""

import json
import logging
import os
from datetime import date

from flask import Blueprint, current_app, make_response, redirect, render_template, request, session, url_for

from ..errors import MissingParameter, PublicationError
from ..models import Edition, EventRecord, NoContent, TicketOrder, UserIdentity
from ..services.auth_service import AuthorizationFlow
from ..services.cache_service import apply_validator, compute_validator
from ..services.edition_service import EditionService
from ..services.eventbrite_gateway import EventbriteGateway
from ..utils.date_utils import parse_delivery_time

logger = logging.getLogger(__name__)
publication_bp = Blueprint('publication', __name__)

SAMPLES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'samples')


def _auth_flow() -> AuthorizationFlow:
    config = current_app.config
    return AuthorizationFlow(
        client_id=config['EVENTBRITE_APPLICATION_KEY'],
        client_secret=config['EVENTBRITE_CLIENT_SECRET'],
        authorize_url=config['EVENTBRITE_AUTHORIZE_URL'],
        token_url=config['EVENTBRITE_TOKEN_URL'],
        timeout=config['REQUEST_TIMEOUT']
    )


def _edition_service() -> EditionService:
    config = current_app.config
    api_url = config['EVENTBRITE_API_URL']
    timeout = config['REQUEST_TIMEOUT']
    return EditionService(
        gateway_factory=lambda token: EventbriteGateway(token, api_url, timeout),
        exclude_past=config['EXCLUDE_PAST_EVENTS']
    )


def _callback_url() -> str:
    return url_for('publication.oauth_return', _external=True)


@publication_bp.errorhandler(PublicationError)
def handle_publication_error(error):
    """Plain-text message with the error's status"""
    if error.status_code >= 500:
        logger.error(f"{request.path} failed: {error.message}")
    else:
        logger.warning(f"{request.path} rejected: {error.message}")
    return error.message, error.status_code, {'Content-Type': 'text/plain; charset=utf-8'}


@publication_bp.route('/')
def index():
    return ''


@publication_bp.route('/favicon.ico')
def favicon():
    return '', 410


@publication_bp.route('/validate_config/', methods=['POST'])
def validate_config():
    """Nothing to validate, every configuration is accepted"""
    return '', 200


@publication_bp.route('/configure/')
def configure():
    """Start the OAuth flow, remembering where to send the user afterwards"""
    authorize_url = _auth_flow().begin(
        session,
        request.args.get('return_url'),
        request.args.get('error_url'),
        _callback_url()
    )
    return redirect(authorize_url)


@publication_bp.route('/return/')
def oauth_return():
    """Eventbrite sends the user back here with an authorization code"""
    target = _auth_flow().complete(session, request.args.get('code'), _callback_url())
    return redirect(target)


@publication_bp.route('/edition/')
def edition():
    """Render the events and tickets starting the day after delivery"""
    access_token = request.args.get('access_token')
    if not access_token:
        raise MissingParameter("No access_token received", status_code=401)

    local_delivery_time = request.args.get('local_delivery_time')
    parse_delivery_time(local_delivery_time)

    result = _edition_service().assemble(access_token, local_delivery_time)
    validator = compute_validator(result.user.identity_key, date.today())

    if isinstance(result, NoContent):
        response = make_response("No tickets found.", 204)
    else:
        response = make_response(render_template(
            'publication.html',
            user=result.user,
            events=result.events,
            tickets=result.tickets
        ))

    return apply_validator(response, validator, request)


@publication_bp.route('/sample/')
def sample():
    """Render an edition from the bundled sample data"""
    with open(os.path.join(SAMPLES_DIR, 'events.json'), 'r') as f:
        events = [EventRecord.from_api(item, organizer=True) for item in json.load(f)]
    with open(os.path.join(SAMPLES_DIR, 'tickets.json'), 'r') as f:
        tickets = [TicketOrder.from_api(item) for item in json.load(f)]

    result = Edition(
        user=UserIdentity(user_id='999999', first_name='Francis', last_name='Overton',
                          email='francis@example.com'),
        events=events,
        tickets=tickets
    )
    response = make_response(render_template(
        'publication.html',
        user=result.user,
        events=result.events,
        tickets=result.tickets
    ))
    return apply_validator(response, compute_validator('sample', date.today()), request)
