"""
Feature: Store note attachments
  As a user attaching files to notes
  I want uploads written to disk with their metadata recorded
  So that devices can fetch them later

Scenario: Upload stores the file under a generated name
Scenario: Oversized or empty uploads are rejected
Scenario: A failed metadata insert removes the written file
Scenario: Missing row and missing file are reported separately
"""

import re
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from app.config import settings
from app.errors import BlobMissingError, NotFoundError, StorageError, ValidationFailedError
from app.services import attachments as attachment_service
from app.services import blobs
from app.services import notes as note_service


@pytest.mark.asyncio
async def test_create_attachment_writes_file_and_row(session, attachments_dir):
    note = await note_service.create_note(session, "receipt")

    attachment = await attachment_service.create_attachment(
        session, note.id, "scan.final.pdf", "application/pdf", b"%PDF-1.7"
    )

    assert attachment.id is not None
    assert attachment.note_id == note.id
    assert attachment.original_name == "scan.final.pdf"
    assert attachment.mime_type == "application/pdf"
    assert attachment.size == 8
    assert re.fullmatch(r"\d+_[0-9a-f]{32}\.pdf", attachment.filename)
    assert (attachments_dir / attachment.filename).read_bytes() == b"%PDF-1.7"


@pytest.mark.asyncio
async def test_missing_mime_type_defaults_to_octet_stream(session):
    note = await note_service.create_note(session, "blob")

    attachment = await attachment_service.create_attachment(session, note.id, "data", None, b"\x00\x01")

    assert attachment.mime_type == "application/octet-stream"
    assert "." not in attachment.filename


@pytest.mark.asyncio
async def test_attachment_for_missing_note(session, attachments_dir):
    with pytest.raises(NotFoundError):
        await attachment_service.create_attachment(session, 99, "a.txt", "text/plain", b"hi")
    assert not attachments_dir.exists() or list(attachments_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_oversized_attachment_rejected(session, monkeypatch, attachments_dir):
    monkeypatch.setattr(settings, "max_attachment_bytes", 4)
    note = await note_service.create_note(session, "big")

    with pytest.raises(ValidationFailedError):
        await attachment_service.create_attachment(session, note.id, "big.bin", None, b"12345")
    with pytest.raises(ValidationFailedError):
        await attachment_service.create_attachment(session, note.id, "empty.bin", None, b"")

    assert not attachments_dir.exists() or list(attachments_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_failed_insert_removes_written_file(session, monkeypatch, attachments_dir):
    note = await note_service.create_note(session, "flaky")
    monkeypatch.setattr(
        session,
        "commit",
        AsyncMock(side_effect=OperationalError("INSERT INTO attachments", {}, Exception("disk I/O error"))),
    )

    with pytest.raises(StorageError):
        await attachment_service.create_attachment(session, note.id, "a.txt", "text/plain", b"hello")

    assert list(attachments_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_list_note_attachments_newest_first(session):
    note = await note_service.create_note(session, "gallery")
    first = await attachment_service.create_attachment(session, note.id, "1.jpg", "image/jpeg", b"1")
    second = await attachment_service.create_attachment(session, note.id, "2.jpg", "image/jpeg", b"2")

    listed = await attachment_service.list_note_attachments(session, note.id)

    assert [a.id for a in listed] == [second.id, first.id]


@pytest.mark.asyncio
async def test_resolve_attachment(session):
    note = await note_service.create_note(session, "doc")
    attachment = await attachment_service.create_attachment(session, note.id, "notes.txt", "text/plain", b"abc")

    blob = await attachment_service.resolve_attachment(session, attachment.id)

    assert blob.path.read_bytes() == b"abc"
    assert blob.original_name == "notes.txt"
    assert blob.mime_type == "text/plain"
    assert blob.size == 3


@pytest.mark.asyncio
async def test_resolve_missing_row_and_missing_file(session):
    with pytest.raises(NotFoundError) as exc_info:
        await attachment_service.resolve_attachment(session, 1)
    assert not isinstance(exc_info.value, BlobMissingError)

    note = await note_service.create_note(session, "doc")
    attachment = await attachment_service.create_attachment(session, note.id, "gone.txt", "text/plain", b"x")
    blobs.blob_path(attachment.filename).unlink()

    with pytest.raises(BlobMissingError):
        await attachment_service.resolve_attachment(session, attachment.id)


def test_generated_filenames_do_not_collide():
    names = {blobs.generate_filename("photo.jpeg") for _ in range(100)}
    assert len(names) == 100
    assert all(name.endswith(".jpeg") for name in names)
