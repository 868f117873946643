import re
from collections.abc import Iterable
from dataclasses import dataclass

from chatlens.services.parsing.types import RecordKind

# Sender names never span lines and are followed by ": " (one literal space).
SENDER_SPLIT_RE = re.compile(r"^([^:\n]+?): (.*)", re.DOTALL)

Signature = tuple[str, re.Pattern[str]]

# Evaluated in order, first match wins.
SYSTEM_SIGNATURES: tuple[Signature, ...] = (
    ("encryption_notice", re.compile(r"messages and calls are end-to-end encrypted", re.IGNORECASE)),
    ("subject_changed", re.compile(r"changed the subject", re.IGNORECASE)),
    ("group_settings_changed", re.compile(r"changed (?:this|the) group", re.IGNORECASE)),
    ("group_created", re.compile(r"created group", re.IGNORECASE)),
    ("participant_added", re.compile(r"added\s", re.IGNORECASE)),
    ("participant_removed", re.compile(r"removed\s", re.IGNORECASE)),
    ("participant_left", re.compile(r"left$", re.IGNORECASE)),
    ("participant_joined", re.compile(r"joined using", re.IGNORECASE)),
    ("phone_number_changed", re.compile(r"changed their phone number", re.IGNORECASE)),
    ("security_code_changed", re.compile(r"your security code.*changed", re.IGNORECASE)),
    ("disappearing_messages", re.compile(r"disappear(?:ed|ing messages)", re.IGNORECASE)),
    ("message_timer", re.compile(r"message timer", re.IGNORECASE)),
    ("media_omitted", re.compile(r"<media omitted>", re.IGNORECASE)),
    ("you_were_added", re.compile(r"you were added", re.IGNORECASE)),
    ("waiting_for_message", re.compile(r"waiting for this message", re.IGNORECASE)),
)


@dataclass(frozen=True, slots=True)
class ClassifiedBody:
    kind: RecordKind
    sender: str | None
    text: str


def compile_signature(name: str, pattern: str | re.Pattern[str]) -> Signature:
    if isinstance(pattern, re.Pattern):
        return name, re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
    return name, re.compile(pattern, re.IGNORECASE)


def extend_signatures(
    extra: Iterable[tuple[str, str | re.Pattern[str]]],
    base: tuple[Signature, ...] = SYSTEM_SIGNATURES,
) -> tuple[Signature, ...]:
    """Return a new signature table with ``extra`` appended after ``base``."""
    table = list(base)
    names = {name for name, _ in table}
    for name, pattern in extra:
        if name in names:
            raise ValueError(f"System signature already registered: {name}")
        names.add(name)
        table.append(compile_signature(name, pattern))
    return tuple(table)


def match_system_signature(text: str, signatures: Iterable[Signature] = SYSTEM_SIGNATURES) -> str | None:
    for name, pattern in signatures:
        if pattern.search(text):
            return name
    return None


def classify_body(body: str, signatures: Iterable[Signature] = SYSTEM_SIGNATURES) -> ClassifiedBody:
    """Decide whether an entry body is a system notice or a ``sender: text`` message."""
    split = SENDER_SPLIT_RE.match(body)
    if not split:
        return ClassifiedBody(kind=RecordKind.SYSTEM, sender=None, text=body.strip())
    sender, rest = split.groups()
    if match_system_signature(rest, signatures) is not None:
        return ClassifiedBody(kind=RecordKind.SYSTEM, sender=None, text=body.strip())
    return ClassifiedBody(kind=RecordKind.MESSAGE, sender=sender.strip(), text=rest.strip())
