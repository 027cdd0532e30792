"""Pydantic schemas: form input models, principal and health responses."""

from poseidon.schemas.auth import Principal
from poseidon.schemas.forms import (
    BidListForm,
    CurvePointForm,
    FormModel,
    RatingForm,
    RuleNameForm,
    TradeForm,
    UserCreateForm,
    UserUpdateForm,
    form_field_names,
    parse_form,
    validate_form,
)
from poseidon.schemas.health import HealthResponse

__all__ = [
    "BidListForm",
    "CurvePointForm",
    "FormModel",
    "HealthResponse",
    "Principal",
    "RatingForm",
    "RuleNameForm",
    "TradeForm",
    "UserCreateForm",
    "UserUpdateForm",
    "form_field_names",
    "parse_form",
    "validate_form",
]
