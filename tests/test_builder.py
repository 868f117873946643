from chatlens.services.parsing.builder import build_chat, derive_display_name, infer_owner
from chatlens.services.parsing.classifier import extend_signatures
from chatlens.services.parsing.lines import split_entries
from chatlens.services.parsing.types import RecordKind


def _build(text: str):
    return build_chat(split_entries(text))


def test_continuation_lines_join_the_open_message():
    summary = _build("1/2/24, 10:00 - A: line1\nline2\nline3\n1/2/24, 10:01 - B: next")
    assert len(summary.records) == 2
    assert summary.records[0].text == "line1\nline2\nline3"
    assert summary.records[1].sender == "B"
    assert summary.records[1].text == "next"


def test_encryption_notice_is_a_system_record():
    summary = _build("1/2/24, 9:00 - Messages and calls are end-to-end encrypted.")
    (record,) = summary.records
    assert record.kind is RecordKind.SYSTEM
    assert record.sender is None
    assert record.is_owner is False
    assert summary.owner is None


def test_sequence_index_is_dense_and_ordered():
    summary = _build(
        "header line\n"
        "1/2/24, 9:00 - Alex created group \"Trip\"\n"
        "1/2/24, 9:01 - Alex: hi\n"
        "1/2/24, 9:02 - Sam: hello\n"
        "1/2/24, 9:03 - Sam left"
    )
    assert [record.sequence_index for record in summary.records] == [0, 1, 2, 3]
    assert [record.kind for record in summary.records] == [
        RecordKind.SYSTEM,
        RecordKind.MESSAGE,
        RecordKind.MESSAGE,
        RecordKind.SYSTEM,
    ]


def test_literal_you_is_owner_even_with_fewer_messages():
    summary = _build(
        "1/2/24, 9:00 - Alex: one\n"
        "1/2/24, 9:01 - Alex: two\n"
        "1/2/24, 9:02 - You: three"
    )
    assert summary.owner == "You"
    assert [record.is_owner for record in summary.records] == [False, False, True]
    assert summary.display_name == "Alex"


def test_owner_tie_breaks_on_first_appearance():
    summary = _build(
        "1/2/24, 9:00 - Sam: one\n"
        "1/2/24, 9:01 - Alex: two\n"
        "1/2/24, 9:02 - Alex: three\n"
        "1/2/24, 9:03 - Sam: four"
    )
    assert summary.participants == ("Sam", "Alex")
    assert summary.owner == "Sam"
    assert summary.display_name == "Alex"


def test_owner_is_highest_count():
    assert infer_owner({"Sam": 1, "Alex": 3, "Lee": 3}) == "Alex"


def test_infer_owner_without_senders():
    assert infer_owner({}) is None


def test_group_display_name_counts_all_participants():
    assert derive_display_name(["You", "Alex", "Sam", "Lee"], "You") == "Group (4 participants)"
    assert derive_display_name(["Alex", "Sam", "Lee"], "You") == "Group (3 participants)"


def test_single_participant_display_name_is_owner():
    assert derive_display_name(["Alex"], "Alex") == "Alex"


def test_display_name_fallback():
    assert derive_display_name([], None) == "Chat"
    assert derive_display_name([], None, fallback="Untitled") == "Untitled"


def test_empty_input_yields_empty_summary():
    for text in ("", "   \n\n", "no timestamps here\nat all"):
        summary = _build(text)
        assert summary.records == ()
        assert summary.participants == ()
        assert summary.owner is None
        assert summary.display_name == "Chat"
        assert summary.is_empty


def test_sender_counts_follow_participant_order():
    summary = _build(
        "1/2/24, 9:00 - Sam: one\n"
        "1/2/24, 9:01 - Alex: two\n"
        "1/2/24, 9:02 - Alex: <Media omitted>\n"
        "1/2/24, 9:03 - Alex: three"
    )
    assert summary.sender_counts() == {"Sam": 1, "Alex": 2}
    assert summary.message_count == 3
    assert summary.owner == "Alex"


def test_building_twice_is_deterministic():
    text = "1/2/24, 9:00 - Sam: one\n1/3/24, 9:01 pm - Alex: two\nmore"
    assert _build(text) == _build(text)


def test_name_with_trailing_colon_and_continuation_is_system():
    summary = _build("1/2/24, 10:00 - Reminder:\nbring snacks")
    (record,) = summary.records
    assert record.kind is RecordKind.SYSTEM
    assert record.sender is None
    assert record.text == "Reminder:\nbring snacks"
    assert summary.owner is None


def test_build_chat_uses_the_signature_table_it_is_given():
    text = "1/2/24, 9:00 - Bot: This message was deleted\n1/2/24, 9:01 - Sam: ok"
    table = extend_signatures([("message_deleted", r"this message was deleted")])
    summary = build_chat(split_entries(text), signatures=table)
    assert [record.kind for record in summary.records] == [RecordKind.SYSTEM, RecordKind.MESSAGE]
    assert summary.participants == ("Sam",)
    assert _build(text).participants == ("Bot", "Sam")
