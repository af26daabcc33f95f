#!/usr/bin/env python3
"""
Daily ETag for editions
The validator depends only on who the user is and today's date
"""

import hashlib
import logging
from datetime import date

logger = logging.getLogger(__name__)


def compute_validator(identity_key: str, today: date) -> str:
    """md5 of the identity key and the date as DDMMYYYY"""
    return hashlib.md5((identity_key + today.strftime('%d%m%Y')).encode()).hexdigest()


def apply_validator(response, validator: str, request):
    """Set the ETag and turn the response into a 304 if the client already has it"""
    response.set_etag(validator)
    response = response.make_conditional(request)
    if response.status_code == 304:
        logger.info("Client already has this edition, returning 304")
    return response
