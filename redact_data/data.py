"""
redact-data - Data Model

Typed model for a unit of data in the redact system:

- DataPath: a normalized, json-style dotted path (".my.json.path.")
- DataValue: a leaf value, either unencrypted (bool, u64, i64, f64, string)
  or an encrypted payload tagged with its decrypted type and key name
- Data: a path plus one or more values plus the optional list of key
  names the data is encrypted by
- DataCollection: an ordered page of Data returned by prefix reads

All models are immutable and serialize to and from JSON losslessly.
"""

import json
import re
from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def normalize_path(path: str) -> str:
    """
    Ensure a data path begins and ends with a period.

    Empty strings normalize to "." and "." stays ".". Any other string gets
    a leading and/or trailing period added when missing. Strings made only
    of periods, or containing runs of periods, are not collapsed.
    """
    if not path:
        return "."

    if len(path) == 1:
        return path if path == "." else f".{path}."

    starts = path[0] == "."
    ends = path[-1] == "."

    if starts and ends:
        return path
    if not starts and not ends:
        return f".{path}."
    if starts:
        return f"{path}."
    return f".{path}"


class DataPath(RootModel[str]):
    """
    Json-style location of a Data object, always formatted as ".my.json.path.".

    Validation normalizes the path on creation and on deserialization, so
    any dotted path can be supplied.
    """

    root: str = "."

    model_config = ConfigDict(frozen=True)

    @field_validator("root", mode="before")
    @classmethod
    def _unwrap(cls, v: Any) -> Any:
        if isinstance(v, DataPath):
            return v.root
        return v

    @field_validator("root")
    @classmethod
    def _normalize(cls, v: str) -> str:
        return normalize_path(v)

    @classmethod
    def of(cls, path: "str | DataPath") -> "DataPath":
        """Return ``path`` as a DataPath, normalizing strings."""
        if isinstance(path, DataPath):
            return path
        return cls(path)

    def __str__(self) -> str:
        return self.root

    def __repr__(self) -> str:
        return f"DataPath({self.root!r})"

    def __hash__(self) -> int:
        return hash(self.root)


class DataType(str, Enum):
    """Scalar type of a value, or of an encrypted payload once decrypted."""

    BOOL = "bool"
    U64 = "u64"
    I64 = "i64"
    F64 = "f64"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


class UnencryptedDataValue(BaseModel):
    """A plaintext leaf value. Never an array or object."""

    kind: Literal["unencrypted"] = "unencrypted"
    data_type: DataType = Field(default=DataType.BOOL, description="Scalar type of the value")
    value: StrictBool | StrictInt | StrictFloat | StrictStr = Field(default=False, description="The raw value")

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    @model_validator(mode="after")
    def _check_type(self) -> "UnencryptedDataValue":
        value = self.value
        is_int = isinstance(value, int) and not isinstance(value, bool)

        if self.data_type == DataType.BOOL:
            ok = isinstance(value, bool)
        elif self.data_type == DataType.U64:
            ok = is_int and 0 <= value <= U64_MAX
        elif self.data_type == DataType.I64:
            ok = is_int and I64_MIN <= value <= I64_MAX
        elif self.data_type == DataType.F64:
            ok = isinstance(value, float)
        else:
            ok = isinstance(value, str)

        if not ok:
            raise ValueError(f"value {value!r} is not a valid {self.data_type.value}")
        return self

    @classmethod
    def of(cls, value: bool | int | float | str) -> "UnencryptedDataValue":
        """Wrap a native Python scalar, choosing its type from the value."""
        if isinstance(value, bool):
            return cls(data_type=DataType.BOOL, value=value)
        if isinstance(value, int):
            if value >= 0:
                return cls(data_type=DataType.U64, value=value)
            return cls(data_type=DataType.I64, value=value)
        if isinstance(value, float):
            return cls(data_type=DataType.F64, value=value)
        if isinstance(value, str):
            return cls(data_type=DataType.STRING, value=value)
        raise TypeError(f"unsupported data value type: {type(value).__name__}")

    @classmethod
    def from_str(cls, s: str) -> "UnencryptedDataValue":
        """
        Infer the narrowest scalar a string represents.

        Tried in order: bool ("true"/"false"), u64, i64, f64. Anything that
        does not parse is kept as a string.
        """
        if s in ("true", "false"):
            return cls(data_type=DataType.BOOL, value=s == "true")

        if _UNSIGNED_RE.fullmatch(s):
            n = int(s)
            if n <= U64_MAX:
                return cls(data_type=DataType.U64, value=n)

        if _SIGNED_RE.fullmatch(s):
            n = int(s)
            if I64_MIN <= n <= I64_MAX:
                return cls(data_type=DataType.I64, value=n)

        if _FLOAT_RE.fullmatch(s):
            return cls(data_type=DataType.F64, value=float(s))

        return cls(data_type=DataType.STRING, value=s)

    @classmethod
    def from_json_value(cls, v: Any) -> "UnencryptedDataValue":
        """
        Build a value from a decoded JSON document.

        null becomes the empty string, numbers are inferred from their
        textual form, and arrays/objects are kept as compact JSON text.
        """
        if v is None:
            return cls(data_type=DataType.STRING, value="")
        if isinstance(v, bool):
            return cls(data_type=DataType.BOOL, value=v)
        if isinstance(v, int | float):
            return cls.from_str(json.dumps(v))
        if isinstance(v, str):
            return cls(data_type=DataType.STRING, value=v)
        return cls(data_type=DataType.STRING, value=json.dumps(v, separators=(",", ":")))

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


class EncryptedDataValue(BaseModel):
    """An encrypted payload, the type it decrypts to, and the key that encrypted it."""

    kind: Literal["encrypted"] = "encrypted"
    value: bytes = Field(..., description="Encrypted payload")
    data_type: DataType = Field(..., description="Type of the payload once decrypted")
    key: str = Field(..., description="Name of the key that encrypted the payload")

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64", val_json_bytes="base64")

    def __str__(self) -> str:
        payload = self.value.decode("utf-8", errors="replace")
        return f'encrypted(key: "{self.key}", type: "{self.data_type.value}", value: "{payload}")'


DataValue = Annotated[UnencryptedDataValue | EncryptedDataValue, Field(discriminator="kind")]


class Data(BaseModel):
    """
    A unit of data in the redact system.

    Each Data lives at a DataPath and holds one or more DataValues. The key
    names in ``encrypted_by`` record which keys encrypted it; they are kept
    separate from the per-value encryption tags and are not reconciled with
    them here.
    """

    path: DataPath = Field(..., description="Normalized location of the data")
    values: tuple[DataValue, ...] = Field(..., min_length=1, description="Ordered leaf values")
    encrypted_by: tuple[str, ...] | None = Field(default=None, description="Names of the encrypting keys")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(
        cls,
        path: str | DataPath,
        *values: "UnencryptedDataValue | EncryptedDataValue | bool | int | float | str",
        encrypted_by: list[str] | None = None,
    ) -> "Data":
        """Build a Data, wrapping bare Python scalars as unencrypted values."""
        wrapped = [
            v if isinstance(v, UnencryptedDataValue | EncryptedDataValue) else UnencryptedDataValue.of(v)
            for v in values
        ]
        return cls(
            path=DataPath.of(path),
            values=tuple(wrapped),
            encrypted_by=tuple(encrypted_by) if encrypted_by is not None else None,
        )

    @property
    def key(self) -> str:
        """The normalized path as a plain string, used as the storage/cache key."""
        return str(self.path)

    def __str__(self) -> str:
        return "".join(str(v) for v in self.values)


class DataCollection(BaseModel):
    """A page of Data returned by a prefix read, in path order."""

    data: list[Data] = Field(default_factory=list, description="Data in the page")

    def __iter__(self) -> Iterator[Data]:  # type: ignore[override]
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> Data:
        return self.data[index]
