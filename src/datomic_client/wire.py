"""
EDN transcoding.

Payloads reach the peer either as text the caller already wrote in EDN
(`Raw`) or as Python values to serialize (`Structured`). Plain strings are
taken as Raw at the call boundary and never encoded a second time.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

import edn_format

from .errors import DecodingError, EncodingError


@dataclass(frozen=True)
class Raw:
    text: str


@dataclass(frozen=True)
class Structured:
    value: Any


WireInput = Union[Raw, Structured]


def as_wire_input(value: Any) -> WireInput:
    if isinstance(value, (Raw, Structured)):
        return value
    if isinstance(value, str):
        return Raw(value)
    return Structured(value)


def transcode(value: Any) -> str:
    """
    Return the EDN text to send for `value`.

    Python lists are written as EDN vectors and tuples as EDN lists, so
    call forms such as `(pull ?e [*])` are built from tuples; pass argument
    lists as lists. bytes are written as strings.

    Raises:
      EncodingError if a structured value holds something EDN cannot express.
    """
    wire_input = as_wire_input(value)
    if isinstance(wire_input, Raw):
        return wire_input.text
    try:
        return edn_format.dumps(wire_input.value)
    except (NotImplementedError, TypeError, ValueError) as e:
        raise EncodingError(wire_input.value, str(e)) from e


def decode(text: str) -> Any:
    """
    Parse a body holding exactly one EDN value. A blank body parses to None.

    Raises:
      DecodingError if the text is not EDN, or holds more than one value
      (plain-text error pages read as several symbols).
    """
    if not text.strip():
        return None
    try:
        forms = edn_format.loads_all(text)
    except (edn_format.EDNDecodeError, NotImplementedError) as e:
        raise DecodingError(text, str(e)) from e
    if len(forms) != 1:
        raise DecodingError(text, f"expected one EDN value, found {len(forms)}")
    return forms[0]


def keyword(name: str) -> edn_format.Keyword:
    return edn_format.Keyword(name)


def db_alias(storage: Optional[str], dbname: str) -> dict:
    """Query argument that points at `storage/dbname` on the peer."""
    alias = f"{storage}/{dbname}" if storage else dbname
    return {keyword("db/alias"): alias}
