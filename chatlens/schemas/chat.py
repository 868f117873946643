from pydantic import BaseModel, Field

from chatlens.services.parsing.dates import DateIndex
from chatlens.services.parsing.types import ChatSummary, RecordKind


class ChatTextRequest(BaseModel):
    text: str = Field(..., description="Full contents of an exported chat file.")


class RecordRead(BaseModel):
    sequence_index: int
    kind: RecordKind
    sender: str | None
    text: str
    date_token: str
    time_display: str
    is_owner: bool

    model_config = {"from_attributes": True}


class ChatSummaryRead(BaseModel):
    records: list[RecordRead]
    participants: list[str]
    owner: str | None
    display_name: str
    message_count: int
    sender_counts: dict[str, int]

    @classmethod
    def from_summary(cls, summary: ChatSummary) -> "ChatSummaryRead":
        return cls(
            records=[RecordRead.model_validate(record) for record in summary.records],
            participants=list(summary.participants),
            owner=summary.owner,
            display_name=summary.display_name,
            message_count=summary.message_count,
            sender_counts=summary.sender_counts(),
        )


class MonthBucketRead(BaseModel):
    key: str
    label: str
    dates: list[str]

    model_config = {"from_attributes": True}


class DateIndexRead(BaseModel):
    dates: list[str]
    months: list[MonthBucketRead]
    unparsed: list[str]

    @classmethod
    def from_index(cls, index: DateIndex) -> "DateIndexRead":
        return cls(
            dates=index.dates,
            months=[MonthBucketRead.model_validate(bucket) for bucket in index.months],
            unparsed=index.unparsed,
        )


class ChatParseResponse(BaseModel):
    chat: ChatSummaryRead
    date_index: DateIndexRead
