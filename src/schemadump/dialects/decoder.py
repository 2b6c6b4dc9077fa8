"""
Conversion of catalog rows into Column records.

Catalog drivers hand back NULLs, 0/1 integers, bit flags, Decimals and
(on some MySQL builds) bytes. Everything is normalized here so the output
model only ever sees str / int / bool, and a NULL length, precision or
scale stays "not present" instead of turning into 0.
"""
from decimal import Decimal
from typing import Any, Optional, Sequence
from ..domain.models import Column
from ..exceptions import RowDecodeError

STANDARD_ROW_WIDTH = 9
LEGACY_ROW_WIDTH = 9

_OPERATION = "decoding column row"

_TRUE_STRINGS = {"1", "YES", "Y", "TRUE", "T"}
_FALSE_STRINGS = {"0", "NO", "N", "FALSE", "F", ""}

def check_width(row: Sequence[Any], width: int) -> None:
    if row is None or len(row) != width:
        got = "None" if row is None else len(row)
        raise RowDecodeError(_OPERATION, f"expected {width} fields, got {got}")

def to_text(value: Any, field: str, allow_bytes: bool = False) -> str:
    if allow_bytes and isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise RowDecodeError(_OPERATION, f"{field} is not valid UTF-8: {e}")
    if not isinstance(value, str):
        raise RowDecodeError(_OPERATION, f"{field} must be text, got {type(value).__name__}")
    return value

def to_name(value: Any, field: str, allow_bytes: bool = False) -> str:
    name = to_text(value, field, allow_bytes)
    if not name:
        raise RowDecodeError(_OPERATION, f"{field} is empty")
    return name

def to_optional_int(value: Any, field: str) -> Optional[int]:
    """NULL -> None; any integral value -> int; anything else is an error."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise RowDecodeError(_OPERATION, f"{field} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    if isinstance(value, (str, bytes)):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise RowDecodeError(_OPERATION, f"{field} must be an integer, got {value!r}")

def to_flag(value: Any, field: str) -> bool:
    """Coerces 0/1, bit, bool and YES/NO encodings; NULL is false."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, Decimal)):
        return value != 0
    if isinstance(value, (bytes, bytearray)):
        # BIT(1) columns arrive as b'\x00' / b'\x01'
        return any(value)
    if isinstance(value, str) and value.strip().upper() in _TRUE_STRINGS:
        return True
    if isinstance(value, str) and value.strip().upper() in _FALSE_STRINGS:
        return False
    raise RowDecodeError(_OPERATION, f"{field} is not a boolean flag: {value!r}")

def to_nullability(value: Any, field: str, allow_bytes: bool = False) -> str:
    text = to_text(value, field, allow_bytes).strip().upper()
    if text not in ("YES", "NO"):
        raise RowDecodeError(_OPERATION, f"{field} must be YES or NO, got {text!r}")
    return text

def decode_standard_row(row: Sequence[Any], allow_bytes: bool = False) -> Column:
    """
    Shape shared by the INFORMATION_SCHEMA dialects:
    name, type, is_nullable, char length, precision, scale,
    is_primary_key, is_identity, default.
    """
    check_width(row, STANDARD_ROW_WIDTH)
    name, data_type, nullable, length, precision, scale, is_pk, is_identity, default = row

    return Column(
        column_name=to_name(name, "column name", allow_bytes),
        data_type=to_name(data_type, "data type", allow_bytes),
        is_nullable=to_nullability(nullable, "is_nullable", allow_bytes),
        max_length=to_optional_int(length, "character length"),
        precision=to_optional_int(precision, "numeric precision"),
        scale=to_optional_int(scale, "numeric scale"),
        is_primary_key=to_flag(is_pk, "is_primary_key"),
        is_identity=to_flag(is_identity, "is_identity"),
        default_value=to_text(default, "default value", allow_bytes) if default is not None else "",
    )

def decode_legacy_row(row: Sequence[Any]) -> Column:
    """
    Sybase system-table shape:
    name, type, length, precision, scale, is_nullable, is_identity,
    default, primary-key placeholder.
    """
    check_width(row, LEGACY_ROW_WIDTH)
    name, data_type, length, precision, scale, nullable, is_identity, default, is_pk = row

    return Column(
        column_name=to_name(name, "column name"),
        data_type=to_name(data_type, "data type"),
        is_nullable=to_nullability(nullable, "is_nullable"),
        max_length=to_optional_int(length, "length"),
        precision=to_optional_int(precision, "numeric precision"),
        scale=to_optional_int(scale, "numeric scale"),
        is_primary_key=to_flag(is_pk, "is_primary_key"),
        is_identity=to_flag(is_identity, "is_identity"),
        default_value=to_text(default, "default value") if default is not None else "",
    )
