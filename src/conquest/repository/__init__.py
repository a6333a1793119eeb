"""Persistence adapters for conquest entities."""

from conquest.repository.json_store import JsonDocumentStore

__all__ = ["JsonDocumentStore"]
