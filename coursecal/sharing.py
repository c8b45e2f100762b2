"""Invitation lifecycle for events shared with peers."""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

from .errors import DuplicateShare, InvalidTransition, NotFound, ValidationError
from .event_store import EventStore
from .models import Event, Share, ShareStatus

logger = logging.getLogger(__name__)

# pending is the only state with outgoing transitions
TRANSITIONS: dict[ShareStatus, frozenset] = {
    ShareStatus.PENDING: frozenset({ShareStatus.ACCEPTED, ShareStatus.DECLINED}),
    ShareStatus.ACCEPTED: frozenset(),
    ShareStatus.DECLINED: frozenset(),
}


@dataclass
class ShareResult:
    """
    Outcome of a share call.

    Attributes:
        added: Newly created pending shares, in request order
        skipped: Recipients that already held a share (or were repeated)
    """

    added: list[Share] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ShareSummary:
    total: int
    accepted: int
    pending: int
    declined: int


def _reject_single_id(ids: Any) -> None:
    # a bare string would be iterated character by character
    if isinstance(ids, str):
        raise ValidationError(f"Expected a list of ids, got the string {ids!r}")


def expand_recipients(
    recipient_ids: Iterable[str],
    group_ids: Iterable[str] = (),
    groups: Optional[Mapping[str, Iterable[str]]] = None,
) -> list[str]:
    """
    Merge individual recipients with the members of selected groups.

    Args:
        recipient_ids: Individually selected recipients
        group_ids: Selected group ids
        groups: Mapping of group id to member recipient ids

    Returns:
        Unique recipient ids, individuals first, in selection order

    Raises:
        NotFound: If a selected group is unknown
        ValidationError: If recipient_ids or group_ids is a single string
    """
    _reject_single_id(recipient_ids)
    _reject_single_id(group_ids)
    groups = groups or {}
    merged: list[str] = []
    seen: set[str] = set()

    def add(recipient_id: str) -> None:
        if recipient_id not in seen:
            seen.add(recipient_id)
            merged.append(recipient_id)

    for recipient_id in recipient_ids:
        add(recipient_id)
    for group_id in group_ids:
        if group_id not in groups:
            raise NotFound(f"Recipient group {group_id} not found")
        for member in groups[group_id]:
            add(member)
    return merged


class SharingStateMachine:
    """
    Manages per-event share records and their status transitions.

    Shares start as pending and move once to accepted or declined. They are
    never removed, and a recipient holds at most one share per event.
    """

    def __init__(
        self,
        store: EventStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store: EventStore = store
        self.clock: Callable[[], datetime] = clock

    def share(
        self,
        event_id: str,
        recipient_ids: Iterable[str],
        message: Optional[str] = None,
        allow_edit: bool = False,
        notify: bool = True,
        strict: bool = False,
    ) -> ShareResult:
        """
        Invite recipients to an event.

        Recipients that already hold a share are skipped rather than
        duplicated, and reported back in the result.

        Args:
            event_id: Event to share
            recipient_ids: Recipients to invite, in order
            message: Optional note attached to every new share
            allow_edit: Whether recipients may edit the event
            notify: Whether the caller intends to notify recipients
            strict: Raise DuplicateShare instead of skipping

        Returns:
            The added shares and the skipped recipient ids

        Raises:
            NotFound: If the event does not exist
            ValidationError: If a recipient id is empty or recipient_ids is a string
            DuplicateShare: In strict mode, if any recipient was skipped
        """
        event = self.store.get(event_id)
        _reject_single_id(recipient_ids)
        recipients = [self._check_recipient(r) for r in recipient_ids]

        present = {share.recipient_id for share in event.shared_with}
        result = ShareResult()
        now = self.clock()
        message = message.strip() if message and message.strip() else None

        for recipient_id in recipients:
            if recipient_id in present:
                result.skipped.append(recipient_id)
                continue
            present.add(recipient_id)
            result.added.append(
                Share(
                    recipient_id=recipient_id,
                    shared_at=now,
                    message=message,
                    allow_edit=allow_edit,
                )
            )

        if result.skipped:
            if strict:
                raise DuplicateShare(event_id, result.skipped)
            logger.warning(
                "Event %s already shared with %s, skipped",
                event_id,
                ", ".join(result.skipped),
            )

        if result.added:
            self.store.apply_shares(
                event_id,
                event.shared_with + tuple(result.added),
                expected_version=event.version,
            )
            logger.info(
                "Shared event %s with %d recipient(s)%s",
                event_id,
                len(result.added),
                "" if notify else " without notification",
            )
        return result

    def respond(
        self,
        event_id: str,
        recipient_id: str,
        decision: Any,
        expected_version: Optional[int] = None,
    ) -> Share:
        """
        Accept or decline a pending share.

        Args:
            event_id: Shared event
            recipient_id: Recipient answering the invitation
            decision: ShareStatus.ACCEPTED / DECLINED or "accepted" / "declined"
            expected_version: Event version the caller last read

        Returns:
            The updated share

        Raises:
            NotFound: If the event or the share does not exist
            ValidationError: If the decision is not accepted or declined, or
                the recipient id is empty
            InvalidTransition: If the share was already resolved
            Conflict: If expected_version does not match
        """
        recipient_id = self._check_recipient(recipient_id)
        target = ShareStatus.parse(decision)
        if target is ShareStatus.PENDING:
            raise ValidationError("Decision must be accepted or declined")

        event = self.store.get(event_id)
        self.store.check_version(event, expected_version)
        current = event.share_for(recipient_id)
        if current is None:
            raise NotFound(f"Event {event_id} is not shared with {recipient_id}")
        if target not in TRANSITIONS[current.status]:
            raise InvalidTransition(
                f"Share of event {event_id} with {recipient_id} is already "
                f"{current.status.value}, cannot become {target.value}"
            )

        updated = dataclasses.replace(
            current, status=target, responded_at=self.clock()
        )
        shares = tuple(
            updated if share.recipient_id == recipient_id else share
            for share in event.shared_with
        )
        self.store.apply_shares(event_id, shares, expected_version=event.version)
        logger.info(
            "Recipient %s %s event %s", recipient_id, target.value, event_id
        )
        return updated

    def shared_recipients(self, event_id: str, status: Any = None) -> list[Share]:
        """Return the shares of an event, optionally only those with a status."""
        shares = self.store.get(event_id).shared_with
        if status is None:
            return list(shares)
        wanted = ShareStatus.parse(status)
        return [share for share in shares if share.status is wanted]

    def summary(self, event_id: str) -> ShareSummary:
        shares = self.store.get(event_id).shared_with
        counts = {status: 0 for status in ShareStatus}
        for share in shares:
            counts[share.status] += 1
        return ShareSummary(
            total=len(shares),
            accepted=counts[ShareStatus.ACCEPTED],
            pending=counts[ShareStatus.PENDING],
            declined=counts[ShareStatus.DECLINED],
        )

    def invitations_for(
        self, recipient_id: str, status: Any = None
    ) -> list[tuple[Event, Share]]:
        """
        List events shared with a recipient.

        Args:
            recipient_id: Recipient whose invitations to list
            status: Optional status to restrict to

        Returns:
            (event, share) pairs ordered by event start time
        """
        recipient_id = self._check_recipient(recipient_id)
        wanted = None if status is None else ShareStatus.parse(status)
        found = []
        for event in self.store.all():
            share = event.share_for(recipient_id)
            if share is None:
                continue
            if wanted is None or share.status is wanted:
                found.append((event, share))
        return found

    @staticmethod
    def _check_recipient(recipient_id: Any) -> str:
        if not isinstance(recipient_id, str) or not recipient_id.strip():
            raise ValidationError(f"Invalid recipient id {recipient_id!r}")
        return recipient_id.strip()
