from .archive import (
    ArchiveError,
    Decoder,
    Encoder,
    lookup_model_type,
    model_type_name,
    register_model_type,
)
from .files import read_bytes, write_bytes
from .metrics import MetricsClient
from .resources import read_collection, read_collection_file

__all__ = [
    "ArchiveError",
    "Decoder",
    "Encoder",
    "lookup_model_type",
    "model_type_name",
    "register_model_type",
    "read_bytes",
    "write_bytes",
    "MetricsClient",
    "read_collection",
    "read_collection_file",
]
