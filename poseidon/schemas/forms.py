"""
Input models for every create/update form.

Each form posts camelCase field names (``bidQuantity``, ``sandPRating`` ...);
the models expose them as snake_case attributes matching the ORM columns.
``validate_form`` turns a submitted form into either a model instance or a
list of ``FieldError`` pairs that the templates render next to each input.
"""

import re
from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

import pydantic
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from poseidon.core.exceptions import FieldError, ValidationError
from poseidon.core.roles import Role
from poseidon.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PASSWORD_SYMBOLS,
    USERNAME_MAX_LEN,
)

_PASSWORD_PATTERN = re.compile(
    rf"^(?=.*[A-Za-z])(?=.*\d)(?=.*[{re.escape(PASSWORD_SYMBOLS)}])"
    rf"[A-Za-z\d{re.escape(PASSWORD_SYMBOLS)}]+$"
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def mandatory(label: str, strip: bool = True) -> BeforeValidator:
    """Reject blank input with '<label> is mandatory'."""

    def check(value: Any) -> Any:
        if _is_blank(value):
            raise ValueError(f"{label} is mandatory")
        return value.strip() if strip and isinstance(value, str) else value

    return BeforeValidator(check)


def _blank_to_none(value: Any) -> Any:
    return None if _is_blank(value) else value


BlankAsNone = BeforeValidator(_blank_to_none)


def check_password_policy(password: str | None) -> str | None:
    if password is None:
        return None
    if len(password) < PASSWORD_MIN_LEN:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if len(password) > PASSWORD_MAX_LEN:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_LEN} characters")
    if not _PASSWORD_PATTERN.match(password):
        raise ValueError("Password must contain at least one letter, one number, and one symbol")
    return password


class FormModel(BaseModel):
    """Base for form input: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="ignore",
    )


class BidListForm(FormModel):
    account: Annotated[str, mandatory("Account"), Field(max_length=30)]
    type: Annotated[str, mandatory("Type"), Field(max_length=30)]
    bid_quantity: Annotated[float | None, BlankAsNone] = None


class CurvePointForm(FormModel):
    curve_id: Annotated[int, mandatory("Curve Id")]
    term: Annotated[float, mandatory("Term")]
    value: Annotated[float, mandatory("Value")]


class RatingForm(FormModel):
    moodys_rating: Annotated[str, mandatory("Moody's rating"), Field(max_length=125)]
    sand_p_rating: Annotated[str, mandatory("S&P rating"), Field(max_length=125)]
    fitch_rating: Annotated[str, mandatory("Fitch rating"), Field(max_length=125)]
    order_number: Annotated[int | None, BlankAsNone] = None


class RuleNameForm(FormModel):
    name: Annotated[str, mandatory("Name"), Field(max_length=125)]
    description: Annotated[str, mandatory("Description"), Field(max_length=125)]
    json_str: Annotated[str | None, BlankAsNone, Field(alias="json")] = None
    template: Annotated[str | None, BlankAsNone, Field(max_length=512)] = None
    sql_str: Annotated[str | None, BlankAsNone] = None
    sql_part: Annotated[str | None, BlankAsNone] = None


class TradeForm(FormModel):
    account: Annotated[str, mandatory("Account"), Field(max_length=30)]
    type: Annotated[str, mandatory("Type"), Field(max_length=30)]
    buy_quantity: Annotated[float | None, BlankAsNone] = None


class UserCreateForm(FormModel):
    """New user; the password is required and must satisfy the policy."""

    username: Annotated[str, mandatory("Username"), Field(max_length=USERNAME_MAX_LEN)]
    password: Annotated[str, mandatory("Password", strip=False), AfterValidator(check_password_policy)]
    fullname: Annotated[str, mandatory("FullName"), Field(max_length=125)]
    role: Annotated[Role, mandatory("Role")]


class UserUpdateForm(FormModel):
    """Existing user; a blank password keeps the stored hash."""

    username: Annotated[str, mandatory("Username"), Field(max_length=USERNAME_MAX_LEN)]
    password: Annotated[str | None, BlankAsNone, AfterValidator(check_password_policy)] = None
    fullname: Annotated[str, mandatory("FullName"), Field(max_length=125)]
    role: Annotated[Role, mandatory("Role")]


FormT = TypeVar("FormT", bound=FormModel)


def form_field_names(form_cls: type[FormModel]) -> list[str]:
    """Names the HTML form uses for each field, in declaration order."""
    return [info.alias or name for name, info in form_cls.model_fields.items()]


def _to_field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__all__"
        ctx_error = (err.get("ctx") or {}).get("error")
        if err["type"] == "value_error" and ctx_error is not None:
            message = str(ctx_error)
        else:
            message = err["msg"]
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_form(
    form_cls: type[FormT], submitted: Mapping[str, Any]
) -> tuple[FormT | None, list[FieldError]]:
    """
    Validate submitted form values against form_cls.

    Fields absent from the submission are treated as blank so that they get
    the same 'is mandatory' message as an emptied input.
    """
    data = {name: submitted.get(name, "") for name in form_field_names(form_cls)}
    try:
        return form_cls.model_validate(data), []
    except pydantic.ValidationError as exc:
        return None, _to_field_errors(exc)


def parse_form(form_cls: type[FormT], submitted: Mapping[str, Any]) -> FormT:
    """Like validate_form, but raise ValidationError carrying the field errors."""
    form, errors = validate_form(form_cls, submitted)
    if form is None:
        raise ValidationError(errors)
    return form
