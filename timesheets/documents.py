# File: timesheets/documents.py
# Version: 1.1.0
# Modified: 2026-10-19

"""
Supporting documents of day entries (sick notes, leave forms, ...).

Files go through Django's storage API; the engine only sees opaque bytes keyed
by day entry. Writing and removing files both wait until the surrounding
transaction commits: a rolled back change leaves no orphan and loses no file.
"""

from __future__ import annotations

import base64
import logging
import mimetypes
from functools import partial
from typing import Iterable

from django.core.files.base import ContentFile
from django.db import transaction

from people.models import Person

from .exceptions import NotFound
from .models import DayEntry, DayEntryDocument
from .validation import DocumentUpload

logger = logging.getLogger("timesheets.documents")


def _write_file(storage, name: str, content: bytes, document_id: int) -> None:
    saved = storage.save(name, ContentFile(content))
    if saved != name:
        DayEntryDocument.objects.filter(pk=document_id).update(file=saved)
    logger.info(f"Wrote document file {saved} ({len(content)} bytes)")


def store_documents(entry: DayEntry, uploads: Iterable[DocumentUpload]) -> list[DayEntryDocument]:
    """
    Create document rows now and write their files once the transaction
    commits. A rolled back change leaves no file behind.
    """
    field = DayEntryDocument._meta.get_field("file")
    stored = []
    for up in uploads:
        mime = up.mime_type or mimetypes.guess_type(up.name)[0] or "application/octet-stream"
        doc = DayEntryDocument(
            day_entry=entry,
            original_filename=up.name,
            mime_type=mime,
            file_size=len(up.content),
        )
        doc.file = field.generate_filename(doc, up.name)
        doc.save()
        transaction.on_commit(partial(_write_file, field.storage, doc.file.name, up.content, doc.pk))
        stored.append(doc)
        logger.info(
            f"Stored document '{up.name}' ({doc.file_size} bytes) for entry {entry.date} "
            f"of employee #{entry.employee_id} as {doc.file.name}"
        )
    return stored


def _delete_files(storage, names: list[str]) -> None:
    for name in names:
        storage.delete(name)
    if names:
        logger.info(f"Removed {len(names)} stored document file(s)")


def discard_documents(entry: DayEntry) -> int:
    """Delete the entry's document rows now and their files after commit."""
    docs = list(entry.documents.all())
    if not docs:
        return 0
    storage = DayEntryDocument._meta.get_field("file").storage
    names = [d.file.name for d in docs if d.file]
    entry.documents.all().delete()
    transaction.on_commit(lambda: _delete_files(storage, names))
    return len(docs)


def replace_documents(entry: DayEntry, uploads: Iterable[DocumentUpload]) -> list[DayEntryDocument]:
    discard_documents(entry)
    return store_documents(entry, uploads)


def get_document(employee: Person, document_id: int) -> DayEntryDocument:
    """Look up a document owned by `employee`."""
    doc = (
        DayEntryDocument.objects
        .select_related("day_entry")
        .filter(pk=document_id, day_entry__employee=employee)
        .first()
    )
    if doc is None:
        raise NotFound(f"Document #{document_id} not found")
    return doc


def read_document(document: DayEntryDocument) -> bytes:
    with document.file.open("rb") as fh:
        return fh.read()


def document_as_base64(document: DayEntryDocument) -> dict:
    return {
        "filename": document.original_filename,
        "mime_type": document.mime_type,
        "size": document.file_size,
        "content": base64.b64encode(read_document(document)).decode("ascii"),
    }
