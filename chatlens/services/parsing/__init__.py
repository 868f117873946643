import logging
from pathlib import Path

from chatlens.services.parsing.builder import DEFAULT_FALLBACK_NAME, build_chat
from chatlens.services.parsing.classifier import SYSTEM_SIGNATURES, Signature
from chatlens.services.parsing.dates import DateIndex, group_dates_by_month
from chatlens.services.parsing.lines import iter_entries, split_lines
from chatlens.services.parsing.types import ChatSummary, Record, RecordKind

logger = logging.getLogger(__name__)

__all__ = [
    "ChatSummary",
    "DateIndex",
    "Record",
    "RecordKind",
    "build_date_index",
    "parse_chat",
    "parse_chat_file",
]


def parse_chat(
    text: str,
    fallback_name: str = DEFAULT_FALLBACK_NAME,
    signatures: tuple[Signature, ...] = SYSTEM_SIGNATURES,
) -> ChatSummary:
    lines = split_lines(text)
    summary = build_chat(iter_entries(lines), fallback_name=fallback_name, signatures=signatures)
    logger.info(
        "chat_parsed",
        extra={
            "total_lines": len(lines),
            "record_count": len(summary.records),
            "message_count": summary.message_count,
            "participant_count": len(summary.participants),
        },
    )
    return summary


def parse_chat_file(
    path: str | Path,
    fallback_name: str = DEFAULT_FALLBACK_NAME,
    signatures: tuple[Signature, ...] = SYSTEM_SIGNATURES,
) -> ChatSummary:
    text = Path(path).read_text(encoding="utf-8-sig", errors="replace")
    return parse_chat(text, fallback_name=fallback_name, signatures=signatures)


def build_date_index(summary: ChatSummary) -> DateIndex:
    return group_dates_by_month(summary.unique_dates())
