"""Registry of the entities exposed through the CRUD forms."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from poseidon.core.roles import Role
from poseidon.schemas.forms import (
    BidListForm,
    CurvePointForm,
    FormModel,
    RatingForm,
    RuleNameForm,
    TradeForm,
    UserCreateForm,
    UserUpdateForm,
)
from poseidon.services.crud import CrudService
from poseidon.services.entities import (
    bid_list_service,
    curve_point_service,
    rating_service,
    rule_name_service,
    trade_service,
)
from poseidon.services.users import create_user, update_user, user_service


@dataclass(frozen=True)
class FormField:
    """One input on the add/update forms and, if listed, one column on the list view."""

    name: str
    label: str
    attr: str = ""
    input_type: str = "text"
    choices: tuple[str, ...] = ()
    listed: bool = True
    blank_on_edit: bool = False

    @property
    def column(self) -> str:
        return self.attr or self.name


@dataclass(frozen=True)
class EntityView:
    name: str
    title: str
    service: CrudService
    create_form: type[FormModel]
    fields: tuple[FormField, ...]
    update_form: type[FormModel] | None = None
    creator: Callable[[Session, Any], Any] | None = None
    updater: Callable[[Session, int, Any], Any] | None = None

    @property
    def list_url(self) -> str:
        return f"/{self.name}/list"

    @property
    def listed_fields(self) -> tuple[FormField, ...]:
        return tuple(f for f in self.fields if f.listed)

    def form_for_update(self) -> type[FormModel]:
        return self.update_form or self.create_form

    def create(self, db: Session, form: FormModel) -> Any:
        if self.creator is not None:
            return self.creator(db, form)
        return self.service.create(db, form.model_dump())

    def update(self, db: Session, record_id: int, form: FormModel) -> Any:
        if self.updater is not None:
            return self.updater(db, record_id, form)
        return self.service.update(db, record_id, form.model_dump())

    def values_from(self, record: Any) -> dict[str, str]:
        """Form values for an existing record; blank_on_edit fields are left empty."""
        values: dict[str, str] = {}
        for f in self.fields:
            value = None if f.blank_on_edit else getattr(record, f.column)
            values[f.name] = "" if value is None else str(value)
        return values


ENTITY_VIEWS: tuple[EntityView, ...] = (
    EntityView(
        name="bidList",
        title="Bid List",
        service=bid_list_service,
        create_form=BidListForm,
        fields=(
            FormField("account", "Account"),
            FormField("type", "Type"),
            FormField("bidQuantity", "Bid Quantity", attr="bid_quantity", input_type="number"),
        ),
    ),
    EntityView(
        name="curvePoint",
        title="Curve Point",
        service=curve_point_service,
        create_form=CurvePointForm,
        fields=(
            FormField("curveId", "Curve Id", attr="curve_id", input_type="number"),
            FormField("term", "Term", input_type="number"),
            FormField("value", "Value", input_type="number"),
        ),
    ),
    EntityView(
        name="rating",
        title="Rating",
        service=rating_service,
        create_form=RatingForm,
        fields=(
            FormField("moodysRating", "Moody's Rating", attr="moodys_rating"),
            FormField("sandPRating", "S&P Rating", attr="sand_p_rating"),
            FormField("fitchRating", "Fitch Rating", attr="fitch_rating"),
            FormField("orderNumber", "Order", attr="order_number", input_type="number"),
        ),
    ),
    EntityView(
        name="ruleName",
        title="Rule Name",
        service=rule_name_service,
        create_form=RuleNameForm,
        fields=(
            FormField("name", "Name"),
            FormField("description", "Description"),
            FormField("json", "Json", attr="json_str"),
            FormField("template", "Template"),
            FormField("sqlStr", "SQL", attr="sql_str"),
            FormField("sqlPart", "SQL Part", attr="sql_part"),
        ),
    ),
    EntityView(
        name="trade",
        title="Trade",
        service=trade_service,
        create_form=TradeForm,
        fields=(
            FormField("account", "Account"),
            FormField("type", "Type"),
            FormField("buyQuantity", "Buy Quantity", attr="buy_quantity", input_type="number"),
        ),
    ),
    EntityView(
        name="user",
        title="User",
        service=user_service,
        create_form=UserCreateForm,
        update_form=UserUpdateForm,
        creator=create_user,
        updater=update_user,
        fields=(
            FormField("username", "Username"),
            FormField("password", "Password", input_type="password", listed=False, blank_on_edit=True),
            FormField("fullname", "Full Name"),
            FormField("role", "Role", input_type="select", choices=tuple(r.value for r in Role)),
        ),
    ),
)
