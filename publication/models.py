#!/usr/bin/env python3
"""
Data Models for the Eventbrite publication
Per-request records built from Eventbrite API payloads
"""

from datetime import datetime
from typing import Optional, List, Dict, Any, Union
from dataclasses import dataclass, field
from enum import Enum


class FetchOutcome(Enum):
    """How an Eventbrite list response should be treated"""
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class UserIdentity:
    """The authenticated Eventbrite user"""
    user_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def identity_key(self) -> str:
        return str(self.user_id)

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "UserIdentity":
        return cls(
            user_id=str(payload['user_id']),
            first_name=payload.get('first_name') or "",
            last_name=payload.get('last_name') or "",
            email=payload.get('email') or ""
        )


@dataclass
class EventRecord:
    """An Eventbrite event, either organized by the user or behind a ticket"""
    id: str
    title: str
    start_date: str
    timezone: str
    end_date: Optional[str] = None
    venue: Dict[str, Any] = field(default_factory=dict)
    url: Optional[str] = None
    organizer: bool = False

    @classmethod
    def from_api(cls, payload: Dict[str, Any], organizer: bool = False) -> "EventRecord":
        """Build from the 'event' dict of a user_list_events or order payload"""
        return cls(
            id=str(payload['id']),
            title=payload.get('title') or "",
            start_date=payload['start_date'],
            end_date=payload.get('end_date'),
            timezone=payload['timezone'],
            venue=payload.get('venue') or {},
            url=payload.get('url'),
            organizer=organizer
        )


@dataclass
class TicketOrder:
    """A ticket order the user bought, wrapping the event it is for"""
    id: str
    event: EventRecord
    quantity: int = 1
    ticket_name: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "TicketOrder":
        """Build from the 'order' dict of a user_list_tickets payload"""
        tickets = payload.get('tickets') or []
        ticket_name = None
        quantity = 0
        for entry in tickets:
            ticket = entry.get('ticket', entry)
            ticket_name = ticket_name or ticket.get('name')
            quantity += int(ticket.get('quantity', 1))

        return cls(
            id=str(payload['id']),
            event=EventRecord.from_api(payload['event']),
            quantity=quantity or 1,
            ticket_name=ticket_name,
            raw=payload
        )


@dataclass(frozen=True)
class DeliveryWindow:
    """Acceptance window for items that start the day after delivery"""
    reference: datetime
    midnight: datetime


@dataclass
class Edition:
    """Everything that will be printed for one delivery"""
    user: UserIdentity
    events: List[EventRecord] = field(default_factory=list)
    tickets: List[TicketOrder] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.events and not self.tickets


@dataclass
class NoContent:
    """The user has no events or tickets at all"""
    user: UserIdentity


EditionResult = Union[Edition, NoContent]
