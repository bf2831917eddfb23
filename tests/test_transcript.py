"""Tests for transcript deduplication and history building."""

from receptionist.domains.messaging.transcript import build_history, deduplicate
from receptionist.domains.pipeline.contracts import ConversationTurn, TranscriptEntry, TurnRole


def _entry(id, body, name="Ana", from_me=None):
    return TranscriptEntry(id=id, sender_display_name=name, body=body, from_me=from_me)


class TestDeduplicate:
    def test_example_transcript(self):
        entries = [
            _entry("1", "Oi"),
            _entry("1", "Oi"),
            _entry("2", "  "),
            _entry("3", "Preciso de ajuda"),
        ]

        result = deduplicate(entries)

        assert [(e.id, e.body) for e in result] == [("1", "Oi"), ("3", "Preciso de ajuda")]

    def test_keeps_first_occurrence_and_order(self):
        entries = [
            _entry("a", "primeira"),
            _entry("b", "segunda"),
            _entry("a", "repetida"),
            _entry("c", "terceira"),
            _entry("b", "outra"),
        ]

        result = deduplicate(entries)

        assert [e.id for e in result] == ["a", "b", "c"]
        assert result[0].body == "primeira"

    def test_drops_missing_ids_and_blank_bodies(self):
        entries = [_entry("", "sem id"), _entry("x", ""), _entry("y", "\n\t "), _entry("z", "ok")]

        result = deduplicate(entries)

        assert [e.id for e in result] == ["z"]
        assert all(e.body.strip() for e in result)

    def test_blank_entry_does_not_claim_its_id(self):
        entries = [_entry("1", " "), _entry("1", "ok")]

        result = deduplicate(entries)

        assert [e.body for e in result] == ["ok"]

    def test_empty_input(self):
        assert deduplicate([]) == []

    def test_accepts_any_iterable(self):
        result = deduplicate(_entry(str(i), f"msg {i}") for i in range(3))
        assert len(result) == 3


class TestBuildHistory:
    def test_excludes_last_entry(self):
        entries = [_entry("1", "Oi"), _entry("2", "Olá, Ana!", name="Gemini"), _entry("3", "Preciso de ajuda")]

        history = build_history(entries, "Gemini")

        assert history == [
            ConversationTurn(role=TurnRole.user, text="Oi"),
            ConversationTurn(role=TurnRole.assistant, text="Olá, Ana!"),
        ]

    def test_single_entry_gives_empty_history(self):
        assert build_history([_entry("1", "Oi")], "Gemini") == []

    def test_empty_transcript(self):
        assert build_history([], "Gemini") == []

    def test_history_never_longer_than_transcript_minus_one(self):
        entries = [_entry(str(i), f"m{i}") for i in range(7)]
        assert len(build_history(entries, "Gemini")) == 6

    def test_from_me_flag_takes_precedence_over_display_name(self):
        entries = [
            _entry("1", "enviada pelo bot", name="Outro Nome", from_me=True),
            _entry("2", "nome igual mas do contato", name="Gemini", from_me=False),
            _entry("3", "live"),
        ]

        history = build_history(entries, "Gemini")

        assert [t.role for t in history] == [TurnRole.assistant, TurnRole.user]

    def test_is_deterministic(self):
        entries = [_entry("1", "a"), _entry("2", "b", name="Gemini"), _entry("3", "c")]
        assert build_history(entries, "Gemini") == build_history(entries, "Gemini")
