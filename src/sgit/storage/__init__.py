"""Storage layer for SGit.

This module provides the content-addressable object store, the commit and
staging record types, and commit object management.
"""

from sgit.storage.commit_builder import CommitBuilder
from sgit.storage.object_store import ObjectStore, hash_content
from sgit.storage.records import Commit, StagingEntry

__all__ = [
    "ObjectStore",
    "hash_content",
    "Commit",
    "StagingEntry",
    "CommitBuilder",
]
