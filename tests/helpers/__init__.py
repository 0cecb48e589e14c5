from .fakes import (
    FakeAlgod,
    FakeIndexer,
    RecordingSigner,
    application,
    bytes_entry,
    uint_entry,
)

__all__ = [
    "FakeAlgod",
    "FakeIndexer",
    "RecordingSigner",
    "application",
    "bytes_entry",
    "uint_entry",
]
