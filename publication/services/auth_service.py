#!/usr/bin/env python3
"""
Eventbrite OAuth2 authorization-code flow
The return and error URLs are kept in the caller's session between the
redirect to Eventbrite and the callback.
"""

import logging
from typing import MutableMapping, Optional
from urllib.parse import urlencode

import requests
from oauthlib.oauth2 import OAuth2Error
from requests_oauthlib import OAuth2Session

from ..errors import MissingCode, MissingParameter, TokenExchangeFailed

logger = logging.getLogger(__name__)

RETURN_URL_KEY = 'bergcloud_return_url'
ERROR_URL_KEY = 'bergcloud_error_url'


class AuthorizationFlow:
    """Sends the user to Eventbrite and exchanges the returned code for a token"""

    def __init__(self, client_id: str, client_secret: str, authorize_url: str,
                 token_url: str, timeout: int = 30):
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorize_url = authorize_url
        self.token_url = token_url
        self.timeout = timeout

    def _oauth_session(self, redirect_uri: str) -> OAuth2Session:
        return OAuth2Session(self.client_id, redirect_uri=redirect_uri)

    def begin(self, session: MutableMapping, return_url: Optional[str],
              error_url: Optional[str], redirect_uri: str) -> str:
        """Remember where to send the user afterwards and return the Eventbrite authorize URL"""
        if not return_url:
            raise MissingParameter("No return_url parameter was provided")

        session[RETURN_URL_KEY] = return_url
        session[ERROR_URL_KEY] = error_url

        url, _state = self._oauth_session(redirect_uri).authorization_url(self.authorize_url)
        logger.info(f"Redirecting to Eventbrite for authorization, callback {redirect_uri}")
        return url

    def exchange_code(self, code: str, redirect_uri: str) -> str:
        """POST the authorization code to Eventbrite and return the access token"""
        try:
            token = self._oauth_session(redirect_uri).fetch_token(
                self.token_url,
                code=code,
                client_secret=self.client_secret,
                include_client_id=True,
                timeout=self.timeout
            )
        except (requests.RequestException, OAuth2Error, ValueError) as e:
            logger.error(f"Token exchange with Eventbrite failed: {e}")
            raise TokenExchangeFailed("Something went wrong when trying to authenticate with Eventbrite.")

        access_token = token.get('access_token') if token else None
        if not access_token:
            logger.error("Eventbrite token response had no access_token")
            raise TokenExchangeFailed("Something went wrong when trying to authenticate with Eventbrite.")
        return access_token

    def complete(self, session: MutableMapping, code: Optional[str], redirect_uri: str) -> str:
        """Exchange the code and return the stored return URL with the token attached"""
        if not code:
            raise MissingCode("No code was returned by Eventbrite")

        access_token = self.exchange_code(code, redirect_uri)

        return_url = session.pop(RETURN_URL_KEY, None)
        session.pop(ERROR_URL_KEY, None)
        if not return_url:
            raise MissingParameter("No return_url was stored for this session")

        separator = '&' if '?' in return_url else '?'
        logger.info("Authorized with Eventbrite, returning to caller")
        return f"{return_url}{separator}{urlencode({'config[access_token]': access_token})}"
