"""Contract ABI parameter encoding."""

from __future__ import annotations

import base64
import binascii
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass

from Crypto.Hash import keccak

from tronkit.address import Address, base58_to_address

_ARRAY_RE = re.compile(r"(.+)\[(\d*)\]")
_INT_RE = re.compile(r"(u?int)(\d*)")
_FIXED_RE = re.compile(r"bytes(\d+)")
_DEC_SIGNED = re.compile(r"[+-]?[0-9]+")
_DEC_UNSIGNED = re.compile(r"[0-9]+")
_HEX_BIG = re.compile(r"[+-]?[0-9a-fA-F]+")

_WORD = 32


@dataclass(frozen=True)
class AbiType:
    """A parsed ABI type such as uint256, bytes32 or address[2]."""

    kind: str
    size: int = 0
    elem: AbiType | None = None

    @classmethod
    def parse(cls, text: str) -> AbiType:
        """Parse an ABI type string."""
        match = _ARRAY_RE.fullmatch(text)
        if match:
            elem = cls.parse(match.group(1))
            if match.group(2) == "":
                return cls("slice", elem=elem)
            return cls("array", size=int(match.group(2)), elem=elem)
        if text in ("bool", "string", "address", "bytes"):
            return cls(text)
        match = _INT_RE.fullmatch(text)
        if match:
            bits = int(match.group(2)) if match.group(2) else 256
            if bits == 0 or bits > 256 or bits % 8:
                raise ValueError(f"unsupported arg type: {text}")
            return cls(match.group(1), size=bits)
        match = _FIXED_RE.fullmatch(text)
        if match:
            length = int(match.group(1))
            if not 0 < length <= 32:
                raise ValueError(f"unsupported arg type: {text}")
            return cls("fixed_bytes", size=length)
        raise ValueError(f"unsupported arg type: {text}")

    @property
    def is_dynamic(self) -> bool:
        if self.kind in ("string", "bytes", "slice"):
            return True
        return self.kind == "array" and self.elem.is_dynamic

    def __str__(self) -> str:
        if self.kind in ("int", "uint"):
            return f"{self.kind}{self.size}"
        if self.kind == "fixed_bytes":
            return f"bytes{self.size}"
        if self.kind == "slice":
            return f"{self.elem}[]"
        if self.kind == "array":
            return f"{self.elem}[{self.size}]"
        return self.kind


@dataclass(frozen=True)
class Argument:
    """A named, typed method input or output."""

    name: str
    type: AbiType
    indexed: bool = False


def load_from_json(text: str) -> list[dict]:
    """Parse a JSON list of single-entry {type: value} parameters."""
    if not text:
        return []
    data = json.loads(text)
    if not isinstance(data, list) or not all(isinstance(p, dict) for p in data):
        raise ValueError("ABI parameters must be a JSON list of objects")
    return data


def signature(method: str) -> bytes:
    """Return the 4-byte selector of a method signature."""
    return keccak.new(digest_bits=256, data=method.encode()).digest()[:4]


def _int_range(abi_type: AbiType) -> tuple[int, int]:
    bits = abi_type.size
    if abi_type.kind == "uint":
        return 0, (1 << bits) - 1
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _convert_to_int(abi_type: AbiType, text: str) -> int:
    if abi_type.size <= 64:
        pattern = _DEC_SIGNED if abi_type.kind == "int" else _DEC_UNSIGNED
        if not pattern.fullmatch(text):
            return 0
        low, high = _int_range(abi_type)
        return min(max(int(text), low), high)
    if text.startswith("0x"):
        digits = text[2:]
        if _HEX_BIG.fullmatch(digits):
            return int(digits, 16)
    elif _DEC_SIGNED.fullmatch(text):
        return int(text, 10)
    raise ValueError(f"invalid integer {text!r}")


def _convert_to_address(value) -> bytes:
    if isinstance(value, Address):
        raw = bytes(value)
    elif isinstance(value, str):
        try:
            raw = bytes(base58_to_address(value))
        except ValueError as exc:
            raise ValueError(f"invalid address {value}: {exc}") from exc
    else:
        raise ValueError(f"invalid address {value!r}")
    if len(raw) < 20:
        raise ValueError(f"invalid address {value!r}")
    return raw[-20:]


def _convert_to_bytes(abi_type: AbiType, value):
    if not isinstance(value, str):
        return value
    try:
        data = binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        try:
            data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid bytes value {value!r}") from exc
    if abi_type.kind == "bytes":
        return data
    if len(data) != abi_type.size:
        raise ValueError(f"invalid size: {abi_type.size}/{len(data)}")
    return data


def _normalize(abi_type: AbiType, value):
    kind = abi_type.kind
    if kind in ("array", "slice"):
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"unable to convert array {value!r}")
        return [_normalize(abi_type.elem, item) for item in value]
    if kind == "address":
        return _convert_to_address(value)
    if kind in ("int", "uint") and isinstance(value, str):
        return _convert_to_int(abi_type, value)
    if kind in ("bytes", "fixed_bytes"):
        return _convert_to_bytes(abi_type, value)
    return value


def _pad_right(data: bytes) -> bytes:
    remainder = len(data) % _WORD
    return data + b"\0" * ((_WORD - remainder) % _WORD)


def _encode_uint(value: int) -> bytes:
    return value.to_bytes(_WORD, "big")


def _head_size(abi_type: AbiType) -> int:
    if abi_type.is_dynamic:
        return _WORD
    if abi_type.kind == "array":
        return abi_type.size * _head_size(abi_type.elem)
    return _WORD


def _encode(abi_type: AbiType, value) -> bytes:
    kind = abi_type.kind
    if kind in ("int", "uint"):
        if not isinstance(value, int):
            raise TypeError(f"expected integer for {abi_type}, got {value!r}")
        low, high = _int_range(abi_type)
        if not low <= value <= high:
            raise ValueError(f"value {value} out of range for {abi_type}")
        return _encode_uint(value % (1 << 256))
    if kind == "bool":
        if not isinstance(value, bool):
            raise TypeError(f"expected bool, got {value!r}")
        return _encode_uint(int(value))
    if kind == "address":
        return bytes(value).rjust(_WORD, b"\0")
    if kind == "fixed_bytes":
        if not isinstance(value, (bytes, bytearray)) or len(value) != abi_type.size:
            raise TypeError(f"expected {abi_type.size} bytes for {abi_type}")
        return bytes(value).ljust(_WORD, b"\0")
    if kind in ("string", "bytes"):
        if isinstance(value, str):
            data = value.encode()
        elif isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        else:
            raise TypeError(f"expected {kind}, got {value!r}")
        return _encode_uint(len(data)) + _pad_right(data)
    if kind == "array":
        if len(value) != abi_type.size:
            raise ValueError(f"expected {abi_type.size} items for {abi_type}, got {len(value)}")
        return _encode_sequence([abi_type.elem] * len(value), value)
    if kind == "slice":
        return _encode_uint(len(value)) + _encode_sequence([abi_type.elem] * len(value), value)
    raise ValueError(f"unsupported arg type: {abi_type}")


def _encode_sequence(types, values) -> bytes:
    offset = sum(_head_size(t) for t in types)
    heads = []
    tails = []
    for abi_type, value in zip(types, values):
        encoded = _encode(abi_type, value)
        if abi_type.is_dynamic:
            heads.append(_encode_uint(offset))
            tails.append(encoded)
            offset += len(encoded)
        else:
            heads.append(encoded)
    return b"".join(heads) + b"".join(tails)


def get_padded_param(params) -> bytes:
    """Encode a list of {type: value} parameters into ABI bytes."""
    types = []
    values = []
    for param in params:
        if not isinstance(param, Mapping) or len(param) != 1:
            raise ValueError(f"invalid param {param!r}")
        ((key, value),) = param.items()
        try:
            abi_type = AbiType.parse(key)
        except ValueError as exc:
            raise ValueError(f"invalid param {param!r}: {exc}") from exc
        types.append(abi_type)
        values.append(_normalize(abi_type, value))
    return _encode_sequence(types, values)


def pack(method: str, params) -> bytes:
    """Return the method selector followed by the encoded parameters."""
    return signature(method) + get_padded_param(params)


def _field(obj, name: str, default=None):
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _arguments(abi, method: str, side: str) -> list[Argument]:
    entries = abi.get("entrys", []) if isinstance(abi, Mapping) else getattr(abi, "entrys", abi)
    for entry in entries:
        if _field(entry, "name") != method:
            continue
        arguments = []
        for item in _field(entry, side) or []:
            type_text = _field(item, "type", "")
            try:
                abi_type = AbiType.parse(type_text)
            except ValueError as exc:
                raise ValueError(f"invalid param {type_text}: {exc}") from exc
            arguments.append(
                Argument(
                    name=_field(item, "name", "") or "",
                    type=abi_type,
                    indexed=bool(_field(item, "indexed", False)),
                )
            )
        return arguments
    raise LookupError("not found")


def get_parser(abi, method: str) -> list[Argument]:
    """Return the output arguments of a method in a contract ABI."""
    return _arguments(abi, method, "outputs")


def get_inputs_parser(abi, method: str) -> list[Argument]:
    """Return the input arguments of a method in a contract ABI."""
    return _arguments(abi, method, "inputs")