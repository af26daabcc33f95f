"""
Format Utilities - Helpers used by the publication templates
"""

import re
from datetime import datetime
from typing import Any, Dict, Optional

from markupsafe import Markup, escape

from .date_utils import localize

ADDRESS_KEYS = ['name', 'address', 'address_2', 'city', 'postal_code']


def pluralize(num, word: str, ext: str = 's') -> str:
    """'1 ticket', '2 tickets'"""
    if int(num) == 1:
        return f"{num} {word}"
    return f"{num} {word}{ext}"


def _day(moment: datetime) -> str:
    return f"{moment:%a}, {moment.day} {moment:%b}"


def format_time_period(start_date: str, end_date: Optional[str], timezone_name: str) -> str:
    """
    Format an event's time span, e.g. '09:00 to 17:00, Tue, 25 Jun 2013 (BST)'
    Dates are like '2013-06-25 09:00:00', timezone like 'Europe/London'
    """
    st = localize(start_date, timezone_name)
    et = localize(end_date or start_date, timezone_name)
    zone = et.strftime('%Z')

    if st.date() == et.date():
        return f"{st:%H:%M} to {et:%H:%M}, {_day(et)} {et.year} ({zone})"
    if st.year != et.year:
        return f"{st:%H:%M} {_day(st)} {st.year} to {et:%H:%M} {_day(et)} {et.year} ({zone})"
    return f"{st:%H:%M} {_day(st)} to {et:%H:%M} {_day(et)} {et.year} ({zone})"


def format_address(venue: Dict[str, Any]) -> Markup:
    """A venue's address, one line per populated field"""
    lines = [escape(venue[key]) for key in ADDRESS_KEYS if venue.get(key)]
    return Markup('<br />').join(lines)


def format_url(url: Optional[str]) -> str:
    """Trim '?ref=ebapi' and the scheme so URLs fit on the page"""
    if not url:
        return ''
    url = re.sub(r'\?ref=ebapi', '', url)
    return re.sub(r'^http://', '', url)
