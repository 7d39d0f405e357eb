"""Wire codec: encoding, decoding, tag tables and templates."""

from __future__ import annotations

from .codec import DecodedMessage, SwiftCodec, compute_checksum
from .tags import (
    CANONICAL_FIELDS,
    CURRENCY_FIELD,
    FieldKind,
    FieldSpec,
    MessageTemplate,
    canonical_field_names,
    field_specs,
    message_templates,
)

__all__ = [
    "CANONICAL_FIELDS",
    "CURRENCY_FIELD",
    "DecodedMessage",
    "FieldKind",
    "FieldSpec",
    "MessageTemplate",
    "SwiftCodec",
    "canonical_field_names",
    "compute_checksum",
    "field_specs",
    "message_templates",
]
