from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rest_framework import serializers

from .models import APE_KEY_NAME_MAX_LENGTH, ApeKey

# `\Z` rather than `$`: a trailing newline must not pass.
APE_KEY_NAME_PATTERN = r"^[0-9a-zA-Z_.-]+\Z"
TOKEN_PATTERN = r"^[a-zA-Z0-9_]+\Z"

APE_KEY_NAME_INVALID = "Invalid ApeKey name"
APE_KEY_NAME_TOO_LONG = (
    f"ApeKey name exceeds maximum of {APE_KEY_NAME_MAX_LENGTH} characters"
)


class StrictRegexField(serializers.RegexField):
    """RegexField that only accepts strings and checks the pattern first.

    `CharField` would coerce numbers to strings, and `RegexField` appends its
    pattern check after the length checks.
    """

    default_error_messages = {"not_a_string": "Must be a string."}

    def __init__(self, regex: str, **kwargs: Any) -> None:
        super().__init__(regex, **kwargs)
        self.validators.insert(0, self.validators.pop())

    def to_internal_value(self, data: Any) -> str:
        if not isinstance(data, str):
            self.fail("not_a_string")
        return super().to_internal_value(data)


class StrictBooleanField(serializers.BooleanField):
    """Accept JSON booleans and the strings "true"/"false" only."""

    def to_internal_value(self, data: Any) -> bool:
        # `1 in {True}` holds, so membership tests would let ints through.
        if isinstance(data, bool):
            return data
        if isinstance(data, str) and data.lower() in {"true", "false"}:
            return data.lower() == "true"
        self.fail("invalid", input=data)


def ape_key_name_field(*, required: bool = True) -> StrictRegexField:
    return StrictRegexField(
        APE_KEY_NAME_PATTERN,
        max_length=APE_KEY_NAME_MAX_LENGTH,
        required=required,
        trim_whitespace=False,
        error_messages={
            "invalid": APE_KEY_NAME_INVALID,
            "max_length": APE_KEY_NAME_TOO_LONG,
            "not_a_string": '"name" must be a string',
        },
    )


def token_field(*, required: bool = True) -> StrictRegexField:
    return StrictRegexField(
        TOKEN_PATTERN,
        required=required,
        trim_whitespace=False,
        error_messages={
            "invalid": "Must only contain alpha-numeric and underscore "
            "characters.",
        },
    )


class StrictSerializer(serializers.Serializer):
    """Serializer that rejects keys it does not declare."""

    def to_internal_value(self, data: Any) -> dict[str, Any]:
        if isinstance(data, Mapping):
            unknown = sorted(
                str(key) for key in data if key not in self.fields
            )
            if unknown:
                raise serializers.ValidationError(
                    {key: [f'"{key}" is not allowed'] for key in unknown}
                )
        return super().to_internal_value(data)


class ApeKeyGenerateSerializer(StrictSerializer):
    name = ape_key_name_field(required=True)
    enabled = StrictBooleanField(required=True)


class ApeKeyEditSerializer(StrictSerializer):
    name = ape_key_name_field(required=False)
    enabled = StrictBooleanField(required=False)


class ApeKeyIdParamsSerializer(StrictSerializer):
    ape_key_id = token_field(required=True)


class ApeKeyDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = ApeKey
        fields = [
            "name",
            "enabled",
            "created_at",
            "modified_at",
            "last_used_at",
            "use_count",
        ]
        read_only_fields = fields
