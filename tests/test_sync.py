"""Tests for the sync orchestrator."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from furikaeri.adapters.file_mirror import FileMirror
from furikaeri.core.documents import DiaryEntry, DiaryStore, ReflectionAnswer
from furikaeri.core.session import Session
from furikaeri.ports.document_store import RemoteDocument, WriteResult
from furikaeri.sync import DIARY, REFLECTIONS, SyncOrchestrator


@pytest.fixture
def remote():
    remote = MagicMock()
    remote.is_configured.return_value = True
    remote.fetch_document.return_value = None
    remote.write_document.return_value = WriteResult(True, "Saved")
    return remote


@pytest.fixture
def mirror(tmp_path):
    return FileMirror(tmp_path)


@pytest.fixture
def orchestrator(mirror, remote):
    return SyncOrchestrator(Session(current_date=date(2024, 3, 1)), mirror, remote)


def _remote_docs(docs: dict):
    def fetch(path):
        if path in docs:
            return RemoteDocument(path=path, content=docs[path], revision="sha")
        return None

    return fetch


class TestHydrate:
    def test_loads_mirror_when_unconfigured(self, orchestrator, mirror, remote):
        remote.is_configured.return_value = False
        mirror.write_mirror(DIARY, {"entries": [{"date": "2024-01-01", "text": "cached"}]})

        report = orchestrator.hydrate()

        assert report.ok
        assert orchestrator.session.diary.entries == [DiaryEntry("2024-01-01", "cached")]
        remote.fetch_document.assert_not_called()

    def test_remote_replaces_mirror_wholesale(self, orchestrator, mirror, remote):
        mirror.write_mirror(DIARY, {"entries": [{"date": "2024-01-01", "text": "cached"}]})
        remote.fetch_document.side_effect = _remote_docs(
            {"data/diary.json": {"entries": [{"date": "2024-02-02", "text": "remote"}]}}
        )

        report = orchestrator.hydrate()

        assert report.loaded == [DIARY]
        assert orchestrator.session.diary.entries == [DiaryEntry("2024-02-02", "remote")]
        assert mirror.read_mirror(DIARY) == {"entries": [{"date": "2024-02-02", "text": "remote"}]}

    def test_absent_remote_keeps_mirror_value(self, orchestrator, mirror, remote):
        mirror.write_mirror(
            REFLECTIONS, {"answers": [{"questionId": 1, "date": "2024-01-01", "text": "kept"}]}
        )
        remote.fetch_document.side_effect = _remote_docs(
            {"data/diary.json": {"entries": []}}
        )

        orchestrator.hydrate()

        assert [a.text for a in orchestrator.session.reflections.answers] == ["kept"]
        assert remote.fetch_document.call_count == 2

    def test_malformed_remote_is_skipped(self, orchestrator, remote):
        remote.fetch_document.side_effect = _remote_docs(
            {"data/reflections.json": {"answers": [{"date": "2024-01-01"}]}}
        )

        report = orchestrator.hydrate()

        assert report.loaded == []
        assert orchestrator.session.reflections.answers == []

    def test_wrongly_typed_remote_is_skipped(self, orchestrator, mirror, remote):
        mirror.write_mirror(DIARY, {"entries": [{"date": "2023-03-01", "text": "cached"}]})
        remote.fetch_document.side_effect = _remote_docs(
            {"data/diary.json": {"entries": [{"date": None, "text": "x"}]}}
        )

        report = orchestrator.hydrate()

        assert DIARY not in report.loaded
        assert orchestrator.session.diary.on_this_day(date(2024, 3, 1)) == [
            DiaryEntry("2023-03-01", "cached")
        ]
        assert mirror.read_mirror(DIARY) == {"entries": [{"date": "2023-03-01", "text": "cached"}]}

    def test_wrongly_typed_mirror_is_ignored(self, orchestrator, mirror, remote):
        remote.is_configured.return_value = False
        mirror.write_mirror(
            REFLECTIONS, {"answers": [{"questionId": "1", "date": 2024, "text": "x"}]}
        )

        orchestrator.hydrate()

        assert orchestrator.session.reflections.query_by_question(1) == []


class TestSync:
    def test_unconfigured_reports_failure(self, orchestrator, remote):
        remote.is_configured.return_value = False
        report = orchestrator.sync()
        assert not report.ok
        assert "settings" in report.message

    def test_nothing_remote_reports_failure(self, orchestrator):
        report = orchestrator.sync()
        assert not report.ok

    def test_pulls_both(self, orchestrator, remote):
        remote.fetch_document.side_effect = _remote_docs(
            {
                "data/reflections.json": {"answers": []},
                "data/diary.json": {"entries": []},
            }
        )
        report = orchestrator.sync()
        assert report.ok
        assert report.loaded == [REFLECTIONS, DIARY]


class TestPersist:
    def test_mirror_written_before_remote(self, orchestrator, mirror, remote):
        seen = {}

        def write_document(path, content, known_revision=None):
            seen["mirror_at_write"] = mirror.read_mirror(DIARY)
            return WriteResult(True, "Saved")

        remote.write_document.side_effect = write_document
        orchestrator.session.diary.upsert("2024-03-01", "hello")

        orchestrator.persist(DIARY)

        assert seen["mirror_at_write"] == {"entries": [{"date": "2024-03-01", "text": "hello"}]}

    def test_remote_failure_keeps_local_state(self, orchestrator, mirror, remote):
        remote.write_document.return_value = WriteResult(False, "Save error: boom")

        result = orchestrator.save_diary("kept locally")

        assert not result.ok
        assert result.message == "Save error: boom"
        assert orchestrator.session.diary.get("2024-03-01").text == "kept locally"
        assert mirror.read_mirror(DIARY) == {"entries": [{"date": "2024-03-01", "text": "kept locally"}]}
        remote.write_document.assert_called_once()

    def test_writes_to_document_path(self, orchestrator, remote):
        orchestrator.persist(REFLECTIONS)
        path, content = remote.write_document.call_args.args
        assert path == "data/reflections.json"
        assert content == {"answers": []}

    def test_unknown_kind(self, orchestrator):
        with pytest.raises(ValueError):
            orchestrator.persist("notes")


class TestMutations:
    def test_record_answer_appends_and_persists(self, orchestrator, remote):
        result = orchestrator.record_answer(5, "  an answer ", on=date(2024, 1, 1))

        assert result.ok
        assert orchestrator.session.reflections.answers == [
            ReflectionAnswer(5, "2024-01-01", "an answer")
        ]
        assert remote.write_document.call_args.args[0] == "data/reflections.json"

    def test_record_empty_answer_rejected(self, orchestrator, remote):
        result = orchestrator.record_answer(5, "   ")
        assert not result.ok
        assert orchestrator.session.reflections.answers == []
        remote.write_document.assert_not_called()

    def test_save_diary_uses_session_date(self, orchestrator):
        orchestrator.save_diary("A")
        orchestrator.save_diary("")
        assert orchestrator.session.diary.entries == []

        orchestrator.save_diary("B")
        assert orchestrator.session.diary.entries == [DiaryEntry("2024-03-01", "B")]

    def test_save_diary_explicit_date(self, orchestrator):
        orchestrator.save_diary("later", on=date(2024, 4, 1))
        assert orchestrator.session.diary.get("2024-04-01").text == "later"

    def test_empty_diary_save_still_persists(self, orchestrator, remote):
        orchestrator.session.diary = DiaryStore(entries=[DiaryEntry("2024-03-01", "x")])
        orchestrator.save_diary("")
        assert remote.write_document.call_args.args[1] == {"entries": []}
