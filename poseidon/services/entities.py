"""CRUD services for the business entities."""

from poseidon.models import BidList, CurvePoint, Rating, RuleName, Trade
from poseidon.services.crud import CrudService

bid_list_service: CrudService[BidList] = CrudService(BidList, "bidList", on_update=("revision_date",))
curve_point_service: CrudService[CurvePoint] = CrudService(CurvePoint, "curvePoint", on_create=("as_of_date",))
rating_service: CrudService[Rating] = CrudService(Rating, "rating")
rule_name_service: CrudService[RuleName] = CrudService(RuleName, "ruleName")
trade_service: CrudService[Trade] = CrudService(Trade, "trade", on_update=("revision_date",))
