"""
Typed cell decoders.

A Decoder turns the text of one cell into a value of a concrete type. The
caller picks the decoder for each role explicitly (time, value, key); there
is no global lookup table keyed by type.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

import pandas as pd

X = TypeVar("X")


@dataclass(frozen=True)
class Decoder(Generic[X]):
    """
    Converts cell text into a value of type X.

    Attributes:
        name: Short name of the target type, used in error messages.
        parse: Function that converts stripped text, raising ValueError
            (or TypeError) when the text is malformed.
    """

    name: str
    parse: Callable[[str], X]

    def decode(self, text: str) -> X:
        """
        Decode one cell.

        Raises:
            ValueError: If the text is not a valid representation. The
                pipeline wraps this into a ParseError with location info.
        """
        try:
            return self.parse(text.strip())
        except (TypeError, ValueError, OverflowError) as e:
            msg = f"cannot decode {text!r} as {self.name}"
            raise ValueError(msg) from e


def _parse_float(text: str) -> float:
    if not text:
        msg = "empty cell"
        raise ValueError(msg)
    return float(text)


def _parse_int(text: str) -> int:
    if not text:
        msg = "empty cell"
        raise ValueError(msg)
    try:
        return int(text)
    except ValueError:
        # Accept integral floats such as "3.0" or "1e3"
        value = float(text)
        if not math.isfinite(value) or not value.is_integer():
            raise
        return int(value)


def _parse_string(text: str) -> str:
    return text


def _parse_timestamp(text: str) -> pd.Timestamp:
    if not text:
        msg = "empty cell"
        raise ValueError(msg)
    value = pd.Timestamp(text)
    if pd.isna(value):
        msg = f"not a timestamp: {text!r}"
        raise ValueError(msg)
    return value


FLOAT: Decoder[float] = Decoder("float", _parse_float)
INT: Decoder[int] = Decoder("int", _parse_int)
STRING: Decoder[str] = Decoder("string", _parse_string)
TIMESTAMP: Decoder[pd.Timestamp] = Decoder("timestamp", _parse_timestamp)


class DecoderName(str, Enum):
    """Decoder names accepted in configuration files."""

    FLOAT = "float"
    INT = "int"
    STRING = "string"
    TIMESTAMP = "timestamp"

    @property
    def decoder(self) -> Decoder:
        """The Decoder instance this name stands for."""
        return {
            DecoderName.FLOAT: FLOAT,
            DecoderName.INT: INT,
            DecoderName.STRING: STRING,
            DecoderName.TIMESTAMP: TIMESTAMP,
        }[self]
