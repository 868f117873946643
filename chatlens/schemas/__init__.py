from chatlens.schemas.chat import (
    ChatParseResponse,
    ChatSummaryRead,
    ChatTextRequest,
    DateIndexRead,
    MonthBucketRead,
    RecordRead,
)

__all__ = [
    "ChatTextRequest",
    "RecordRead",
    "ChatSummaryRead",
    "MonthBucketRead",
    "DateIndexRead",
    "ChatParseResponse",
]
