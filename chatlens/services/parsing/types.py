from collections import Counter
from dataclasses import dataclass
from enum import Enum


class Meridiem(str, Enum):
    AM = "AM"
    PM = "PM"


class RecordKind(str, Enum):
    MESSAGE = "message"
    SYSTEM = "system"


@dataclass(frozen=True, slots=True)
class RawEntry:
    """One timestamped entry with its continuation lines joined into ``body``."""

    date_token: str
    time_token: str
    meridiem: Meridiem | None
    body: str

    @property
    def time_display(self) -> str:
        if self.meridiem is None:
            return self.time_token
        return f"{self.time_token} {self.meridiem.value}"


@dataclass(frozen=True, slots=True)
class Record:
    sequence_index: int
    kind: RecordKind
    sender: str | None
    text: str
    date_token: str
    time_display: str
    is_owner: bool = False


@dataclass(frozen=True, slots=True)
class ChatSummary:
    records: tuple[Record, ...]
    participants: tuple[str, ...]
    owner: str | None
    display_name: str

    @property
    def message_count(self) -> int:
        return sum(1 for record in self.records if record.kind is RecordKind.MESSAGE)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def sender_counts(self) -> dict[str, int]:
        counts = Counter(record.sender for record in self.records if record.kind is RecordKind.MESSAGE)
        return {name: counts[name] for name in self.participants}

    def unique_dates(self) -> list[str]:
        seen: set[str] = set()
        result: list[str] = []
        for record in self.records:
            if record.date_token not in seen:
                seen.add(record.date_token)
                result.append(record.date_token)
        return result
