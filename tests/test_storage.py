"""Tests for sheet encoding and JSON file storage."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from punchclock.config import Settings
from punchclock.tracking import (
    Event,
    LocationNotFound,
    ParseFailure,
    ReadFailure,
    Sheet,
    SheetNotFound,
    SheetStorage,
    WriteFailure,
    decode_sheet,
    encode_sheet,
)

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
T1 = T0 + timedelta(hours=2)


def _sample_sheet() -> Sheet:
    return Sheet(events=[Event(start=T0, stop=T1), Event.new(T1 + timedelta(hours=1))])


class TestEncoding:
    """Tests for encode_sheet and decode_sheet."""

    def test_document_shape(self):
        """The document holds only an events list of start/stop pairs."""
        document = json.loads(encode_sheet(_sample_sheet()))

        assert list(document) == ["events"]
        assert len(document["events"]) == 2
        assert document["events"][0]["start"].startswith("2024-05-01T09:00:00")
        assert document["events"][0]["stop"].startswith("2024-05-01T11:00:00")
        assert document["events"][1]["stop"] is None

    def test_round_trip_with_open_event(self):
        """A sheet with a trailing open event survives a round trip."""
        sheet = _sample_sheet()
        assert decode_sheet(encode_sheet(sheet)) == sheet

    def test_round_trip_empty(self):
        """An empty sheet survives a round trip."""
        assert decode_sheet(encode_sheet(Sheet())) == Sheet()

    @pytest.mark.parametrize("data", [b"", b"   \n"])
    def test_empty_document_is_empty_sheet(self, data: bytes):
        """Empty or blank documents decode to an empty sheet."""
        assert decode_sheet(data) == Sheet()

    def test_decodes_rfc3339(self):
        """RFC 3339 timestamps with a Z suffix are decoded."""
        data = b'{"events": [{"start": "2024-05-01T09:00:00Z", "stop": null}]}'
        sheet = decode_sheet(data)
        assert sheet.events == [Event.new(T0)]

    def test_decoded_sheet_is_trusted(self):
        """Several open events are loaded without complaint."""
        data = json.dumps(
            {"events": [{"start": "2024-05-01T09:00:00Z", "stop": None}] * 2}
        ).encode()
        assert len(decode_sheet(data).events) == 2

    @pytest.mark.parametrize(
        "data",
        [
            b"not json",
            b'{"events": [{"stop": null}]}',
            b'{"events": [{"start": "yesterday"}]}',
            b'{"events": 3}',
            b'{"events": [{"start": "0001-01-01T00:00:00+01:00", "stop": null}]}',
        ],
    )
    def test_invalid_document(self, data: bytes):
        """Malformed documents raise ParseFailure with the cause attached."""
        with pytest.raises(ParseFailure) as excinfo:
            decode_sheet(data)
        assert excinfo.value.__cause__ is not None


class TestSheetStorage:
    """Tests for the SheetStorage file store."""

    def test_load_creates_missing_file(self, tmp_path):
        """Loading a missing file creates an empty sheet file."""
        path = tmp_path / "nested" / "sheet.json"
        storage = SheetStorage(path)

        assert storage.load() == Sheet()
        assert json.loads(path.read_text()) == {"events": []}

    def test_load_missing_file_without_create(self, tmp_path):
        """Without create_if_missing a missing file is SheetNotFound."""
        path = tmp_path / "nested" / "sheet.json"
        storage = SheetStorage(path, create_if_missing=False)

        with pytest.raises(SheetNotFound):
            storage.load()
        assert not path.parent.exists()

    def test_load_missing_file_leaves_no_lock(self, tmp_path):
        """A failed load does not leave a lock file behind."""
        storage = SheetStorage(tmp_path / "sheet.json", create_if_missing=False)

        with pytest.raises(SheetNotFound):
            storage.load()
        assert list(tmp_path.iterdir()) == []

    def test_sheet_not_found_is_read_failure(self):
        """SheetNotFound is a kind of ReadFailure."""
        assert issubclass(SheetNotFound, ReadFailure)

    def test_load_empty_file(self, tmp_path):
        """An empty file loads as an empty sheet."""
        path = tmp_path / "sheet.json"
        path.write_bytes(b"")
        assert SheetStorage(path).load() == Sheet()

    def test_save_then_load(self, tmp_path):
        """A saved sheet loads back equal."""
        storage = SheetStorage(tmp_path / "sheet.json")
        sheet = _sample_sheet()

        storage.save(sheet)

        assert SheetStorage(tmp_path / "sheet.json").load() == sheet

    def test_load_garbage(self, tmp_path):
        """A file that is not JSON raises ParseFailure."""
        path = tmp_path / "sheet.json"
        path.write_text("{{{")
        with pytest.raises(ParseFailure):
            SheetStorage(path).load()

    def test_read_failure(self, tmp_path):
        """An unreadable path raises ReadFailure."""
        path = tmp_path / "sheet.json"
        path.mkdir()
        with pytest.raises(ReadFailure) as excinfo:
            SheetStorage(path).load()
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_write_failure(self, tmp_path):
        """An unwritable path raises WriteFailure."""
        path = tmp_path / "sheet.json"
        path.mkdir()
        with pytest.raises(WriteFailure) as excinfo:
            SheetStorage(path).save(Sheet())
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_uses_configured_path(self, tmp_path, monkeypatch):
        """Without an explicit path the configured one is used."""
        configured = tmp_path / "configured.json"
        monkeypatch.setattr(Settings, "get_sheet_path", lambda self: configured)

        storage = SheetStorage()
        storage.save(_sample_sheet())

        assert storage.path == configured
        assert configured.exists()

    def test_location_not_found(self, monkeypatch):
        """An unresolvable default location raises LocationNotFound."""
        def _no_home(self):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Settings, "get_sheet_path", _no_home)

        with pytest.raises(LocationNotFound) as excinfo:
            SheetStorage().load()
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_error_messages(self):
        """Storage errors have fixed default messages."""
        assert str(LocationNotFound()) == "unable to find sheet file"
        assert str(ReadFailure()) == "unable to read sheet file"
        assert str(ParseFailure()) == "unable to parse sheet"
        assert str(WriteFailure()) == "unable to write sheet to file"
