from collections.abc import Iterable

from chatlens.services.parsing.classifier import SYSTEM_SIGNATURES, Signature, classify_body
from chatlens.services.parsing.types import ChatSummary, RawEntry, Record, RecordKind

OWNER_ALIAS = "You"
DEFAULT_FALLBACK_NAME = "Chat"


def infer_owner(sender_counts: dict[str, int]) -> str | None:
    """Pick the exporting participant.

    ``sender_counts`` must be ordered by first appearance. A literal "You"
    wins outright; otherwise the earliest sender with the highest count.
    """
    if OWNER_ALIAS in sender_counts:
        return OWNER_ALIAS
    owner: str | None = None
    for sender, count in sender_counts.items():
        if owner is None or count > sender_counts[owner]:
            owner = sender
    return owner


def derive_display_name(participants: list[str], owner: str | None, fallback: str = DEFAULT_FALLBACK_NAME) -> str:
    others = [name for name in participants if name != owner]
    if len(others) == 1:
        return others[0]
    if len(others) > 1:
        return f"Group ({len(participants)} participants)"
    return owner or fallback


def build_chat(
    entries: Iterable[RawEntry],
    fallback_name: str = DEFAULT_FALLBACK_NAME,
    signatures: tuple[Signature, ...] = SYSTEM_SIGNATURES,
) -> ChatSummary:
    classified = [(entry, classify_body(entry.body, signatures)) for entry in entries]

    sender_counts: dict[str, int] = {}
    for _, body in classified:
        if body.kind is RecordKind.MESSAGE and body.sender is not None:
            sender_counts[body.sender] = sender_counts.get(body.sender, 0) + 1

    participants = list(sender_counts)
    owner = infer_owner(sender_counts)

    records = tuple(
        Record(
            sequence_index=index,
            kind=body.kind,
            sender=body.sender,
            text=body.text,
            date_token=entry.date_token,
            time_display=entry.time_display,
            is_owner=body.kind is RecordKind.MESSAGE and body.sender == owner,
        )
        for index, (entry, body) in enumerate(classified)
    )
    return ChatSummary(
        records=records,
        participants=tuple(participants),
        owner=owner,
        display_name=derive_display_name(participants, owner, fallback_name),
    )
