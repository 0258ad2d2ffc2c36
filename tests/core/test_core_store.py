"""
Tests for core.store and core.ids — Collections, CRUD base and id providers.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from core.ids import RandomIdProvider, SequenceIdProvider
from core.store import (
    CrudService,
    DuplicateIdError,
    EntityCollection,
    NotFoundError,
    PatchError,
)
from core.time import FixedClock

NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Note:
    note_id: str
    text: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        if not self.text:
            raise ValueError("text must not be empty.")


class NoteService(CrudService[Note]):
    record_type = Note
    entity_name = "Note"
    id_field = "note_id"
    logger_name = "wegesa.test"

    def add_note(self, text):
        return self._create(lambda new_id, now: Note(new_id, text, now, now))


def _note(note_id="n1", text="hello"):
    return Note(note_id, text, NOW, NOW)


# ── Id providers ─────────────────────────────────────────────

class TestIdProviders:
    def test_random_ids_are_short_base36(self):
        ids = {RandomIdProvider().new_id() for _ in range(50)}
        assert len(ids) == 50
        for value in ids:
            assert len(value) == 8
            assert value.isalnum() and value == value.lower()

    def test_random_length_floor(self):
        with pytest.raises(ValueError):
            RandomIdProvider(length=2)

    def test_sequence(self):
        ids = SequenceIdProvider("m")
        assert [ids.new_id() for _ in range(3)] == ["m1", "m2", "m3"]


# ── EntityCollection ─────────────────────────────────────────

class TestEntityCollection:
    def test_add_get_list(self):
        notes = EntityCollection("Note", "note_id")
        notes.add(_note("n1"))
        notes.add(_note("n2", "second"))
        assert notes.get("n2").text == "second"
        assert [n.note_id for n in notes.list()] == ["n1", "n2"]
        assert [n.note_id for n in notes.list(lambda n: n.text == "hello")] == ["n1"]
        assert "n1" in notes
        assert len(notes) == 2

    def test_duplicate_id(self):
        notes = EntityCollection("Note", "note_id")
        notes.add(_note())
        with pytest.raises(DuplicateIdError):
            notes.add(_note())

    def test_get_missing(self):
        notes = EntityCollection("Note", "note_id")
        with pytest.raises(NotFoundError, match="Note 'x' not found"):
            notes.get("x")
        assert notes.find("x") is None

    def test_update_revalidates(self):
        notes = EntityCollection("Note", "note_id")
        notes.add(_note())
        with pytest.raises(ValueError, match="text"):
            notes.update("n1", {"text": ""})
        assert notes.get("n1").text == "hello"

    def test_update_rejects_unknown_and_read_only_fields(self):
        notes = EntityCollection("Note", "note_id", read_only=("created_at",))
        notes.add(_note())
        with pytest.raises(PatchError) as excinfo:
            notes.update("n1", {"colour": "red", "note_id": "n9", "created_at": NOW})
        assert excinfo.value.fields == ("colour", "created_at", "note_id")

    def test_update_extra_bypasses_read_only(self):
        later = datetime(2026, 3, 2, tzinfo=timezone.utc)
        notes = EntityCollection("Note", "note_id", read_only=("updated_at",))
        notes.add(_note())
        updated = notes.update("n1", {"text": "bye"}, extra={"updated_at": later})
        assert updated.updated_at == later

    def test_replace_and_delete(self):
        notes = EntityCollection("Note", "note_id")
        with pytest.raises(NotFoundError):
            notes.replace(_note())
        notes.add(_note())
        notes.replace(_note(text="new"))
        assert notes.get("n1").text == "new"
        assert notes.delete("n1").text == "new"
        with pytest.raises(NotFoundError):
            notes.delete("n1")


# ── CrudService ──────────────────────────────────────────────

class TestCrudService:
    def _service(self):
        clock = FixedClock(NOW)
        return NoteService(clock=clock, id_provider=SequenceIdProvider("n")), clock

    def test_create_stamps_clock_and_id(self):
        service, _ = self._service()
        note = service.add_note("hello")
        assert note.note_id == "n1"
        assert note.created_at == NOW == note.updated_at
        assert service.get("n1") == note
        assert len(service) == 1

    def test_update_stamps_updated_at(self):
        service, clock = self._service()
        service.add_note("hello")
        clock.advance(hours=1)
        note = service.update("n1", {"text": "edited"})
        assert note.text == "edited"
        assert note.created_at == NOW
        assert note.updated_at == clock.now_utc()

    def test_timestamps_are_read_only(self):
        service, _ = self._service()
        service.add_note("hello")
        with pytest.raises(PatchError):
            service.update("n1", {"created_at": NOW})

    def test_delete(self):
        service, _ = self._service()
        service.add_note("hello")
        service.delete("n1")
        assert service.find("n1") is None
        with pytest.raises(NotFoundError):
            service.get("n1")

    def test_list_while_another_thread_creates(self):
        service, _ = self._service()
        creates_done = threading.Event()
        errors = []

        def _writer():
            try:
                for i in range(5000):
                    service.add_note(f"note {i}")
            except Exception as exc:
                errors.append(repr(exc))
            finally:
                creates_done.set()

        def _reader():
            try:
                while not creates_done.is_set():
                    service.list(lambda n: n.text.endswith("7"))
            except Exception as exc:
                errors.append(repr(exc))

        threads = [threading.Thread(target=_writer), threading.Thread(target=_reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        assert errors == []
        assert len(service) == 5000
