"""SwiftCodec — block-structured wire encoding and decoding.

Wire layout::

    {1:F01<sender>0000000000}{2:I<code><receiver>N}{3:{108:<MTxxx>}}{4:
    :20:<reference>
    :32B:<CCY><amount>
    -}{5:{CHK:<token>}}

Encoding is deterministic: fields follow the per-type canonical order from
:mod:`.tags` and only fields present in the content are emitted. 32B is
written whenever an amount or a currency is present.

Decoding yields strings only: amounts with a decimal point and dates as
``YYYY-MM-DD``. :meth:`SwiftCodec.normalize` brings content into that shape
beforehand; content holding only canonical fields then decodes back to its
normalized form. Values must not contain braces or continuation lines shaped
like a field tag; the validator reports both as errors.

The checksum token is derived from the text block; decoding reports it but
does not verify it.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from ..domain.enums import MessageType
from ..primitives.exceptions import MalformedMessageError
from .tags import CURRENCY_FIELD, FieldKind, FieldSpec, field_specs

logger = logging.getLogger("swift_engine.codec")

_SESSION_SEQUENCE = "0000000000"

_BASIC_HEADER = re.compile(r"\{1:[A-Z]\d{2}([A-Z0-9]+?)(\d{10})?\}")
_APPLICATION_HEADER = re.compile(r"\{2:[IO](\d{3})([A-Z0-9]*?)N?\}")
_TEXT_BLOCK = re.compile(r"\{4:\r?\n?(.*?)\r?\n?-\}", re.DOTALL)
_TRAILER = re.compile(r"\{5:\{CHK:([A-Z0-9]+)\}\}")
_FIELD_LINE = re.compile(r"^:(\d{2}[A-Z]?):(.*)$")
_WIRE_DATE = re.compile(r"^\d{8}$")
_AMOUNT_VALUE = re.compile(r"^([A-Z]{3})?(.*)$", re.DOTALL)


@dataclass(frozen=True)
class DecodedMessage:
    """Result of decoding wire text."""

    message_type: MessageType
    content: dict[str, Any]
    sender_id: str
    receiver_id: str
    checksum: str | None = None
    unmapped_tags: dict[str, str] = field(default_factory=dict)


def compute_checksum(text_block: str) -> str:
    """Non-cryptographic 12-character trailer token for a text block."""
    return hashlib.sha256(text_block.encode("utf-8")).hexdigest()[:12].upper()


def _plain_amount(value: Any) -> str:
    return format(value, "f") if isinstance(value, Decimal) else str(value)


class SwiftCodec:
    """Stateless encoder/decoder; safe to share between tasks."""

    # ── Encoding ─────────────────────────────────────────────────

    def encode(
        self,
        content: dict[str, Any],
        message_type: MessageType | str,
        sender_id: str,
        receiver_id: str,
    ) -> str:
        mt = MessageType.parse(message_type)
        text_block = self._encode_text_block(mt, content)
        return (
            f"{{1:F01{sender_id}{_SESSION_SEQUENCE}}}"
            f"{{2:I{mt.code}{receiver_id}N}}"
            f"{{3:{{108:{mt.value}}}}}"
            f"{{4:\n{text_block}-}}"
            f"{{5:{{CHK:{compute_checksum(text_block)}}}}}"
        )

    def _encode_text_block(self, mt: MessageType, content: dict[str, Any]) -> str:
        lines: list[str] = []
        for spec in field_specs(mt):
            value = content.get(spec.name)
            if spec.kind is FieldKind.AMOUNT:
                encoded = self._encode_amount(value, content.get(CURRENCY_FIELD))
            elif value is None or value == "":
                continue
            else:
                encoded = self._encode_value(spec, value)
            if encoded:
                lines.append(f":{spec.tag}:{encoded}\n")
        return "".join(lines)

    @staticmethod
    def _encode_amount(value: Any, currency: Any) -> str:
        # 32B carries the currency even when no amount is given.
        amount = "" if value is None else _plain_amount(value)
        return f"{currency or ''}{amount.replace('.', ',')}"

    @staticmethod
    def _encode_value(spec: FieldSpec, value: Any) -> str:
        if spec.kind is FieldKind.DATE:
            if isinstance(value, (date, datetime)):
                return value.strftime("%Y%m%d")
            return str(value).replace("-", "")
        return str(value)

    def normalize(
        self, content: dict[str, Any], message_type: MessageType | str
    ) -> dict[str, Any]:
        """Content as the wire form reads back: amounts and dates as strings."""
        mt = MessageType.parse(message_type)
        kinds = {spec.name: spec.kind for spec in field_specs(mt)}
        normalized = dict(content)
        for name, value in content.items():
            kind = kinds.get(name)
            if kind is FieldKind.AMOUNT and isinstance(value, (Decimal, int, float)):
                normalized[name] = _plain_amount(value)
            elif kind is FieldKind.DATE and isinstance(value, (date, datetime)):
                normalized[name] = value.strftime("%Y-%m-%d")
        return normalized

    # ── Decoding ─────────────────────────────────────────────────

    def decode(self, raw_message: str) -> DecodedMessage:
        if not isinstance(raw_message, str) or not raw_message.strip():
            raise MalformedMessageError("empty message")
        raw = raw_message.strip()

        self._check_blocks_present(raw)
        text = _TEXT_BLOCK.search(raw)
        if text is None:
            raise MalformedMessageError("text block is not terminated by '-}'")
        # Header and trailer blocks only; block 4 is free text.
        envelope = raw[: text.start()] + raw[text.end() :]
        if envelope.count("{") != envelope.count("}"):
            raise MalformedMessageError("unbalanced block delimiters")

        header = _APPLICATION_HEADER.search(envelope)
        if header is None:
            raise MalformedMessageError("missing or unreadable application header")
        mt = MessageType.from_code(header.group(1))
        receiver_id = header.group(2)

        basic = _BASIC_HEADER.search(envelope)
        sender_id = basic.group(1) if basic else ""

        tagged = self._split_fields(text.group(1))
        content, unmapped = self._map_fields(mt, tagged)
        trailer = _TRAILER.search(envelope)
        checksum = trailer.group(1) if trailer else None
        # TODO: verify CHK once the checksum algorithm is agreed
        logger.debug(
            "Decoded %s from %s (%d fields, checksum=%s)",
            mt.value,
            sender_id,
            len(content),
            checksum,
        )
        return DecodedMessage(
            message_type=mt,
            content=content,
            sender_id=sender_id,
            receiver_id=receiver_id,
            checksum=checksum,
            unmapped_tags=unmapped,
        )

    @staticmethod
    def _check_blocks_present(raw: str) -> None:
        if "{1:" not in raw and "{4:" not in raw:
            raise MalformedMessageError(
                "missing basic header block {1: and text block {4:"
            )
        if "{1:" not in raw:
            raise MalformedMessageError("missing basic header block {1:")
        if "{4:" not in raw:
            raise MalformedMessageError("missing text block {4:")

    @staticmethod
    def _split_fields(body: str) -> list[tuple[str, str]]:
        tagged: list[tuple[str, str]] = []
        for line in body.splitlines():
            match = _FIELD_LINE.match(line)
            if match:
                tagged.append((match.group(1), match.group(2)))
            elif tagged:
                tag, value = tagged[-1]
                tagged[-1] = (tag, f"{value}\n{line}")
            elif line.strip():
                raise MalformedMessageError("text before the first field tag")
        return tagged

    def _map_fields(
        self, mt: MessageType, tagged: list[tuple[str, str]]
    ) -> tuple[dict[str, Any], dict[str, str]]:
        by_tag = {spec.tag: spec for spec in field_specs(mt)}
        content: dict[str, Any] = {}
        unmapped: dict[str, str] = {}
        for tag, value in tagged:
            spec = by_tag.get(tag)
            if spec is None:
                unmapped[tag] = value
                continue
            self._decode_value(spec, value, content)
        return content, unmapped

    @staticmethod
    def _decode_value(spec: FieldSpec, value: str, content: dict[str, Any]) -> None:
        if spec.kind is FieldKind.DATE and _WIRE_DATE.match(value):
            content[spec.name] = f"{value[:4]}-{value[4:6]}-{value[6:]}"
        elif spec.kind is FieldKind.AMOUNT:
            match = _AMOUNT_VALUE.match(value)
            currency = match.group(1) if match else None
            amount = match.group(2) if match else value
            if amount:
                content[spec.name] = amount.replace(",", ".")
            if currency:
                content[CURRENCY_FIELD] = currency
        else:
            content[spec.name] = value
