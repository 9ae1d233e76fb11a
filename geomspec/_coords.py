import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Sequence, Tuple, Union

import msgspec

from ._errors import InvalidConfiguration, MalformedCoordinates

__all__ = ("CoordinateCodec", "Coordinate", "node_kind", "MISSING")


Coordinate = Tuple[float, ...]

Number = Union[int, float]

DEFAULT_DECIMAL_PLACES = 8


class _MissingSingleton:
    """A singleton marking a field absent from a JSON object"""

    def __repr__(self):
        return "MISSING"

    def __reduce__(self):
        return "MISSING"


MISSING = _MissingSingleton()


def node_kind(node: Any) -> str:
    """The name of the JSON node type of a decoded value.

    These match the names used in error messages, e.g. ``"ARRAY"`` or
    ``"STRING"``. An absent field is ``"MISSING"``, and anything that isn't
    part of the JSON data model is ``"POJO"``.
    """
    if node is MISSING:
        return "MISSING"
    elif node is None:
        return "NULL"
    elif isinstance(node, bool):
        return "BOOLEAN"
    elif isinstance(node, (int, float, Decimal)):
        return "NUMBER"
    elif isinstance(node, str):
        return "STRING"
    elif isinstance(node, (list, tuple)):
        return "ARRAY"
    elif isinstance(node, dict):
        return "OBJECT"
    elif isinstance(node, (bytes, bytearray, memoryview)):
        return "BINARY"
    return "POJO"


def is_array(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def _is_number(node: Any) -> bool:
    return isinstance(node, (int, float, Decimal)) and not isinstance(node, bool)


def _render(node: Any) -> str:
    try:
        return msgspec.json.encode(node).decode("utf-8")
    except TypeError:
        return repr(node)


class CoordinateCodec:
    """Encodes and decodes single GeoJSON positions.

    Parameters
    ----------
    decimal_places : int, optional
        The maximum number of fraction digits written for each ordinate.
        Values are rounded half-up, and trailing zeros are dropped. Defaults
        to 8.
    """

    __slots__ = ("_decimal_places", "_quantum")

    def __init__(self, decimal_places: int = DEFAULT_DECIMAL_PLACES):
        if (
            not isinstance(decimal_places, int)
            or isinstance(decimal_places, bool)
            or decimal_places < 0
        ):
            raise InvalidConfiguration(
                f"decimal_places must be a non-negative integer, got {decimal_places!r}"
            )
        self._decimal_places = decimal_places
        self._quantum = Decimal(1).scaleb(-decimal_places)

    @property
    def decimal_places(self) -> int:
        return self._decimal_places

    def __repr__(self):
        return f"CoordinateCodec(decimal_places={self._decimal_places})"

    def format_number(self, value: float) -> Number:
        """Round a single ordinate.

        Rounding starts from the shortest decimal representation of the
        double, so ``0.125`` with 2 places gives ``0.13``. Integral results
        are returned as ``int`` so they're written without a fraction.
        """
        value = float(value)
        if not math.isfinite(value):
            return value
        d = Decimal(repr(value))
        if d.as_tuple().exponent < -self._decimal_places:
            d = d.quantize(self._quantum, rounding=ROUND_HALF_UP)
        if d == d.to_integral_value():
            return int(d)
        return float(d)

    def encode(self, coordinate: Sequence[float]) -> List[Number]:
        """Encode a coordinate as ``[x, y]`` or ``[x, y, z]``.

        The z ordinate is only written if present and finite.
        """
        out = [self.format_number(coordinate[0]), self.format_number(coordinate[1])]
        if len(coordinate) > 2 and math.isfinite(coordinate[2]):
            out.append(self.format_number(coordinate[2]))
        return out

    def decode(self, node: Any) -> Coordinate:
        """Decode a position.

        Accepts an array of 2 or more numbers (anything past the third is
        ignored), or an object with numeric ``x``, ``y``, and optional ``z``
        fields.
        """
        if is_array(node):
            if len(node) < 2:
                raise MalformedCoordinates(f"Invalid number of ordinates: {len(node)}")
            ordinates = node[:3]
        elif isinstance(node, dict):
            ordinates = [node.get("x", MISSING), node.get("y", MISSING)]
            z = node.get("z")
            if z is not None:
                ordinates.append(z)
        else:
            raise MalformedCoordinates(f"Unknown coordinates format: {_render(node)}")

        for ordinate in ordinates:
            if not _is_number(ordinate):
                raise MalformedCoordinates(
                    "Invalid coordinates, expecting numbers but got: "
                    f"{node_kind(ordinate)}"
                )
        return tuple(float(o) for o in ordinates)

    def decode_sequence(self, node: Any) -> List[Coordinate]:
        """Decode an array of positions"""
        expect_array(node)
        return [self.decode(n) for n in node]


def expect_array(node: Any) -> None:
    if not is_array(node):
        raise MalformedCoordinates(
            f"Invalid coordinates, expecting an array but got: {node_kind(node)}"
        )
