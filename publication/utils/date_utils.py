"""
Date Utilities - Work out whether events start the day after delivery
"""

import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser

from ..errors import InvalidParameter
from ..models import DeliveryWindow

logger = logging.getLogger(__name__)

DELIVERY_TIME_FORMAT = '%Y-%m-%dT%H:%M:%S%z'
ONE_DAY = timedelta(days=1)


def parse_delivery_time(value: str) -> datetime:
    """
    Parse the printer's local delivery time, like '2013-06-25T09:00:00+0100'
    The result keeps the fixed UTC offset it was given
    """
    if not value:
        raise InvalidParameter("No local_delivery_time received")
    try:
        return datetime.strptime(value, DELIVERY_TIME_FORMAT)
    except ValueError:
        raise InvalidParameter(f"Invalid local_delivery_time: {value}")


def delivery_window(local_delivery_time: str) -> DeliveryWindow:
    """Midnight at the start of the day after delivery, in the delivery offset"""
    reference = parse_delivery_time(local_delivery_time)
    tomorrow = reference + ONE_DAY
    midnight = tomorrow.replace(hour=0, minute=0, second=0, microsecond=0)
    return DeliveryWindow(reference=reference, midnight=midnight)


def localize(start_date: str, timezone_name: str) -> datetime:
    """
    Interpret an Eventbrite start date like '2013-06-26 10:00:00' in the
    event's own timezone, like 'Europe/London'

    Raises ValueError for an unknown timezone or unparseable date.
    """
    try:
        zone = ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        raise ValueError(f"Unknown timezone: {timezone_name}")

    naive = parser.parse(start_date)
    if naive.tzinfo is not None:
        return naive.astimezone(zone)
    return naive.replace(tzinfo=zone)


def starts_tomorrow(window: DeliveryWindow, start_date: str, timezone_name: str,
                    exclude_past: bool = False) -> bool:
    """
    True if an item starts less than a day after the window's midnight.
    Only an upper bound is applied unless exclude_past is set.
    """
    instant = localize(start_date, timezone_name)
    offset = instant - window.midnight
    if exclude_past and offset < timedelta(0):
        return False
    return offset < ONE_DAY
