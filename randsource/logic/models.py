"""Draw record models and the JSON history codec.

A history is a JSON array of records. Integer draws carry their bounds,
float draws do not:

    [
      {"Index": 1, "Value": 42, "MinValue": 0, "MaxValue": 0, "Type": 9},
      {"Index": 2, "Value": 0.37, "Type": 14}
    ]

`Type` uses the .NET TypeCode numbers (9 = Int32, 14 = Double) so histories
written by the original tooling load unchanged.
"""
import json
from collections.abc import Iterable, Mapping
from enum import IntEnum
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    computed_field,
    model_validator,
)

from randsource.errors import FormatError, InvalidInputError


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class TypeCode(IntEnum):
    """Discriminator written to the `Type` field."""

    INT32 = 9
    DOUBLE = 14

    @classmethod
    def parse(cls, raw: Any) -> "TypeCode | None":
        """
        Resolve a raw discriminator to a TypeCode.

        Accepts the number (9), its string form ("9") or the
        case-insensitive name ("Int32", "Double"). Returns None otherwise.
        """
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            try:
                return cls(raw)
            except ValueError:
                return None
        if isinstance(raw, str):
            text = raw.strip()
            if text.isdigit():
                return cls.parse(int(text))
            return cls.__members__.get(text.upper())
        return None


class IntegerDraw(BaseModel):
    """
    A recorded integer draw.

    min_value == max_value == 0 marks an unbounded draw; any other pair is
    the [min_value, max_value) range the draw was made with.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: int = Field(..., ge=1, strict=True, alias="Index")
    value: Int64 = Field(..., strict=True, alias="Value")
    min_value: Int64 = Field(..., strict=True, alias="MinValue")
    max_value: Int64 = Field(..., strict=True, alias="MaxValue")

    @computed_field(alias="Type")
    @property
    def type(self) -> TypeCode:
        return TypeCode.INT32

    @property
    def is_unbounded(self) -> bool:
        return self.min_value == 0 and self.max_value == 0

    @model_validator(mode="after")
    def check_bounds(self) -> "IntegerDraw":
        if self.min_value > self.max_value:
            raise ValueError(
                f"MinValue {self.min_value} is greater than MaxValue {self.max_value}"
            )
        return self


class FloatDraw(BaseModel):
    """A recorded floating-point draw in [0.0, 1.0)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: int = Field(..., ge=1, strict=True, alias="Index")
    # Strict float still accepts JSON integers such as 0
    value: float = Field(..., ge=0.0, lt=1.0, strict=True, alias="Value")

    @computed_field(alias="Type")
    @property
    def type(self) -> TypeCode:
        return TypeCode.DOUBLE


def _type_tag(record: Any) -> str | None:
    """Pick the union member from the `Type` field, whatever the key order."""
    if isinstance(record, (IntegerDraw, FloatDraw)):
        return record.type.name
    if isinstance(record, Mapping):
        code = TypeCode.parse(record.get("Type", record.get("type")))
        return code.name if code is not None else None
    return None


RandomValue = Annotated[
    Union[
        Annotated[IntegerDraw, Tag(TypeCode.INT32.name)],
        Annotated[FloatDraw, Tag(TypeCode.DOUBLE.name)],
    ],
    Discriminator(
        _type_tag,
        custom_error_type="invalid_type_code",
        custom_error_message="Type must be 9 (Int32) or 14 (Double)",
    ),
]

_history_adapter: TypeAdapter[list[RandomValue]] = TypeAdapter(list[RandomValue])


def sort_by_index(values: Iterable[RandomValue]) -> list[RandomValue]:
    """Return records in ascending index order."""
    return sorted(values, key=lambda v: v.index)


def validate_history(payload: Any) -> list[RandomValue]:
    """
    Validate already-decoded records (models or JSON-shaped mappings).

    Raises:
        InvalidInputError: payload is None.
        FormatError: payload is not a list of well-formed records.
    """
    if payload is None:
        raise InvalidInputError("Missing history")
    if isinstance(payload, (str, bytes, Mapping)):
        raise FormatError(
            f"History must be a sequence of records, got {type(payload).__name__}"
        )
    try:
        return _history_adapter.validate_python(list(payload))
    except ValidationError as e:
        raise FormatError(f"Malformed history: {e}") from e
    except TypeError as e:
        raise FormatError(f"History is not iterable: {e}") from e


def parse_history(text: str | None) -> list[RandomValue]:
    """
    Parse a JSON history string into records.

    Raises:
        InvalidInputError: text is None, empty or whitespace.
        FormatError: text is not valid JSON or not a list of records.
    """
    if text is None or not text.strip():
        raise InvalidInputError("Missing history JSON")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(f"History is not valid JSON: {e}") from e
    except RecursionError as e:
        raise FormatError("History JSON is nested too deeply") from e
    return validate_history(payload)


def dump_history(values: Iterable[RandomValue], indent: int | None = 2) -> str:
    """Serialize records to a JSON array in ascending index order."""
    records = [
        v.model_dump(mode="json", by_alias=True) for v in sort_by_index(values)
    ]
    return json.dumps(records, indent=indent)
