"""
campusnav.infrastructure - Storage Layer
==========================================

    - document_store: DocumentStore ABC, InMemoryDocumentStore, factory
    - record_stores:  ImageStore and ClassroomStore over one collection each
"""

from campusnav.infrastructure.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    create_document_store,
)
from campusnav.infrastructure.record_stores import ClassroomStore, ImageStore, RecordStore

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "create_document_store",
    "RecordStore",
    "ImageStore",
    "ClassroomStore",
]
