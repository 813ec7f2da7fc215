"""
redact-data - DataValue Tests

Tests scalar inference, range validation, rendering of unencrypted and
encrypted values, and discriminated-union parsing.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from redact_data.data import (
    I64_MAX,
    I64_MIN,
    U64_MAX,
    DataType,
    DataValue,
    EncryptedDataValue,
    UnencryptedDataValue,
)


class TestFromStr:
    """Test suite for scalar inference from text."""

    @pytest.mark.parametrize(
        ("text", "data_type", "value"),
        [
            ("true", DataType.BOOL, True),
            ("false", DataType.BOOL, False),
            ("0", DataType.U64, 0),
            ("42", DataType.U64, 42),
            ("-1", DataType.I64, -1),
            ("10.52", DataType.F64, 10.52),
            ("1e3", DataType.F64, 1000.0),
            ("abc", DataType.STRING, "abc"),
            ("10.52a", DataType.STRING, "10.52a"),
            ("", DataType.STRING, ""),
            ("True", DataType.STRING, "True"),
        ],
    )
    def test_inference(self, text: str, data_type: DataType, value: object) -> None:
        """Test the narrowest type is chosen in bool, u64, i64, f64, string order."""
        result = UnencryptedDataValue.from_str(text)
        assert result.data_type == data_type
        assert result.value == value

    def test_u64_boundaries(self) -> None:
        assert UnencryptedDataValue.from_str(str(U64_MAX)).data_type == DataType.U64
        # One past u64 no longer fits any integer type
        assert UnencryptedDataValue.from_str(str(U64_MAX + 1)).data_type == DataType.F64

    def test_i64_boundaries(self) -> None:
        assert UnencryptedDataValue.from_str(str(I64_MIN)).data_type == DataType.I64
        assert UnencryptedDataValue.from_str(str(I64_MIN - 1)).data_type == DataType.F64

    def test_special_floats(self) -> None:
        result = UnencryptedDataValue.from_str("inf")
        assert result.data_type == DataType.F64
        assert result.value == float("inf")


class TestOf:
    """Test suite for inference from native Python values."""

    def test_native_values(self) -> None:
        assert UnencryptedDataValue.of(True).data_type == DataType.BOOL
        assert UnencryptedDataValue.of(7).data_type == DataType.U64
        assert UnencryptedDataValue.of(-7).data_type == DataType.I64
        assert UnencryptedDataValue.of(1.5).data_type == DataType.F64
        assert UnencryptedDataValue.of("x").data_type == DataType.STRING

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            UnencryptedDataValue.of([1, 2])  # type: ignore[arg-type]


class TestFromJsonValue:
    """Test suite for inference from decoded JSON."""

    def test_null_is_empty_string(self) -> None:
        result = UnencryptedDataValue.from_json_value(None)
        assert result.data_type == DataType.STRING
        assert result.value == ""

    def test_numbers(self) -> None:
        assert UnencryptedDataValue.from_json_value(3).data_type == DataType.U64
        assert UnencryptedDataValue.from_json_value(-3).data_type == DataType.I64
        assert UnencryptedDataValue.from_json_value(2.5).value == 2.5

    def test_bool_and_string(self) -> None:
        assert UnencryptedDataValue.from_json_value(False).value is False
        # Strings are never re-inferred
        result = UnencryptedDataValue.from_json_value("12")
        assert result.data_type == DataType.STRING
        assert result.value == "12"

    def test_containers_become_compact_json(self) -> None:
        assert UnencryptedDataValue.from_json_value([1, 2]).value == "[1,2]"
        assert UnencryptedDataValue.from_json_value({"a": 1}).value == '{"a":1}'


class TestValidation:
    """Test suite for type/range consistency."""

    def test_default_is_false(self) -> None:
        value = UnencryptedDataValue()
        assert value.data_type == DataType.BOOL
        assert value.value is False
        assert str(value) == "false"

    @pytest.mark.parametrize(
        ("data_type", "value"),
        [
            (DataType.U64, -1),
            (DataType.U64, U64_MAX + 1),
            (DataType.I64, I64_MAX + 1),
            (DataType.BOOL, 1),
            (DataType.STRING, 1),
            (DataType.F64, "1.0"),
        ],
    )
    def test_rejects_mismatched_values(self, data_type: DataType, value: object) -> None:
        with pytest.raises(ValidationError):
            UnencryptedDataValue(data_type=data_type, value=value)

    def test_frozen(self) -> None:
        value = UnencryptedDataValue.of("x")
        with pytest.raises(ValidationError):
            value.value = "y"  # type: ignore[misc]


class TestRendering:
    """Test suite for textual rendering."""

    def test_unencrypted(self) -> None:
        assert str(UnencryptedDataValue.of(True)) == "true"
        assert str(UnencryptedDataValue.of(42)) == "42"
        assert str(UnencryptedDataValue.of(-42)) == "-42"
        assert str(UnencryptedDataValue.of(10.52)) == "10.52"
        assert str(UnencryptedDataValue.of("hello")) == "hello"

    def test_encrypted(self) -> None:
        value = EncryptedDataValue(value=b"hello", data_type=DataType.STRING, key="k1")
        assert str(value) == 'encrypted(key: "k1", type: "string", value: "hello")'

    def test_encrypted_invalid_utf8_is_replaced(self) -> None:
        value = EncryptedDataValue(value=b"\xffok", data_type=DataType.U64, key="k2")
        assert str(value) == 'encrypted(key: "k2", type: "u64", value: "�ok")'

    @pytest.mark.parametrize(
        "value",
        [True, False, 0, 7, U64_MAX, -5, I64_MIN, 1.0, 10.52, -0.5, 1e16, 1e-7, "hello", "10.52a"],
    )
    def test_rendered_text_infers_back_to_same_value(self, value: bool | int | float | str) -> None:
        """Rendering then inferring recovers both the type and the value."""
        original = UnencryptedDataValue.of(value)

        assert UnencryptedDataValue.from_str(str(original)) == original


class TestDiscriminatedUnion:
    """Test suite for parsing the DataValue union."""

    adapter: TypeAdapter = TypeAdapter(DataValue)

    def test_parses_unencrypted(self) -> None:
        value = self.adapter.validate_python({"kind": "unencrypted", "data_type": "i64", "value": -5})
        assert isinstance(value, UnencryptedDataValue)
        assert value.value == -5

    def test_parses_encrypted_from_base64_json(self) -> None:
        value = self.adapter.validate_json(
            '{"kind": "encrypted", "value": "aGVsbG8=", "data_type": "string", "key": "k1"}'
        )
        assert isinstance(value, EncryptedDataValue)
        assert value.value == b"hello"

    def test_encrypted_payload_serializes_as_base64(self) -> None:
        value = EncryptedDataValue(value=b"hello", data_type=DataType.STRING, key="k1")
        assert '"value":"aGVsbG8="' in value.model_dump_json()

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "other", "value": 1})
