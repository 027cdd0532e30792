"""End-to-end tests for the shared CRUD flow of the five business entities."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from support import WebTestCase

from poseidon.models import BidList, CurvePoint, Rating, RuleName, Trade
from poseidon.services.entities import bid_list_service
from poseidon.web.entities import ENTITY_VIEWS


def _db_down() -> OperationalError:
    return OperationalError("COMMIT", {}, Exception("db down"))


VALID_SUBMISSIONS = {
    "bidList": (BidList, {"account": "NewAccount", "type": "NewType", "bidQuantity": "150.0"}),
    "curvePoint": (CurvePoint, {"curveId": "99", "term": "99.0", "value": "999.0"}),
    "rating": (Rating, {"moodysRating": "Aaa", "sandPRating": "AAA", "fitchRating": "AAA", "orderNumber": "1"}),
    "ruleName": (
        RuleName,
        {
            "name": "NewRule",
            "description": "NewDescription",
            "json": "{}",
            "template": "NewTemplate",
            "sqlStr": "SELECT * FROM new",
            "sqlPart": "WHERE new = 1",
        },
    ),
    "trade": (Trade, {"account": "FlowTest", "type": "TestType", "buyQuantity": "300.0"}),
}


class TestEveryEntity(WebTestCase):
    """List, add form and create work identically for each entity."""

    def setUp(self) -> None:
        super().setUp()
        self.login_user()

    def test_list_and_add_form_render(self) -> None:
        for view in ENTITY_VIEWS:
            if view.name == "user":
                continue
            with self.subTest(entity=view.name):
                self.assertEqual(self.client.get(f"/{view.name}/list").status_code, 200)
                r = self.client.get(f"/{view.name}/add")
                self.assertEqual(r.status_code, 200)
                self.assertIn(f'action="/{view.name}/validate"', r.text)

    def test_valid_create_redirects_to_list(self) -> None:
        for name, (model, data) in VALID_SUBMISSIONS.items():
            with self.subTest(entity=name):
                r = self.client.post(f"/{name}/validate", data=data, follow_redirects=False)
                self.assertEqual(r.status_code, 303)
                self.assertEqual(r.headers["location"], f"/{name}/list")
                self.assertEqual(self.count(model), 1)

    def test_blank_create_persists_nothing(self) -> None:
        for name, (model, data) in VALID_SUBMISSIONS.items():
            blank = {key: "" for key in data}
            with self.subTest(entity=name):
                r = self.client.post(f"/{name}/validate", data=blank, follow_redirects=False)
                self.assertEqual(r.status_code, 200)
                self.assertIn("is mandatory", r.text)
                self.assertIn(f'action="/{name}/validate"', r.text)
                self.assertEqual(self.count(model), 0)


class TestBidListFlow(WebTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.login_user()
        self.bid = BidList(account="Account1", type="Type1", bid_quantity=100.0)
        self.db.add(self.bid)
        self.db.commit()
        self.db.refresh(self.bid)

    def test_list_shows_records(self) -> None:
        r = self.client.get("/bidList/list")
        self.assertIn("Account1", r.text)
        self.assertIn("100.0", r.text)

    def test_blank_account_rerenders_with_values_and_error(self) -> None:
        r = self.client.post(
            "/bidList/validate",
            data={"account": "", "type": "KeepMe", "bidQuantity": "5"},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn("Account is mandatory", r.text)
        self.assertIn('value="KeepMe"', r.text)
        self.assertEqual(self.count(BidList), 1)

    def test_update_form_prefilled(self) -> None:
        r = self.client.get(f"/bidList/update/{self.bid.id}")
        self.assertEqual(r.status_code, 200)
        self.assertIn('value="Account1"', r.text)
        self.assertIn('value="Type1"', r.text)
        self.assertIn(f'action="/bidList/update/{self.bid.id}"', r.text)

    def test_update_form_unknown_id_redirects_with_error(self) -> None:
        r = self.client.get("/bidList/update/999", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/bidList/list?error=Invalid+bidList+id")
        r = self.client.get(r.headers["location"])
        self.assertIn("Invalid bidList id", r.text)

    def test_update_success(self) -> None:
        r = self.client.post(
            f"/bidList/update/{self.bid.id}",
            data={"account": "UpdatedAccount", "type": "UpdatedType", "bidQuantity": "250.0"},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/bidList/list")
        self.db.expire_all()
        bid = self.db.get(BidList, self.bid.id)
        self.assertEqual((bid.account, bid.type, bid.bid_quantity), ("UpdatedAccount", "UpdatedType", 250.0))
        self.assertIsNotNone(bid.revision_date)

    def test_update_invalid_keeps_record(self) -> None:
        r = self.client.post(
            f"/bidList/update/{self.bid.id}",
            data={"account": "", "type": "", "bidQuantity": ""},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn("Type is mandatory", r.text)
        self.db.expire_all()
        self.assertEqual(self.db.get(BidList, self.bid.id).account, "Account1")

    def test_update_unknown_id_shows_message(self) -> None:
        r = self.client.post(
            "/bidList/update/999",
            data={"account": "A", "type": "T"},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn("Invalid bidList id", r.text)
        self.assertEqual(self.count(BidList), 1)

    def test_delete(self) -> None:
        r = self.client.get(f"/bidList/delete/{self.bid.id}", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/bidList/list")
        self.assertEqual(self.count(BidList), 0)

    def test_delete_unknown_id_tolerated(self) -> None:
        r = self.client.get("/bidList/delete/999", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertTrue(r.headers["location"].startswith("/bidList/list"))
        self.assertIn("error=No+bidList+with+given+id", r.headers["location"])
        self.assertEqual(self.count(BidList), 1)

    def test_delete_persistence_failure_redirects_with_message(self) -> None:
        with patch("sqlalchemy.orm.Session.commit", side_effect=_db_down()):
            r = self.client.get(f"/bidList/delete/{self.bid.id}", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/bidList/list?error=Could+not+delete+bidList")
        self.assertEqual(self.count(BidList), 1)

    def test_update_form_query_failure_redirects_with_message(self) -> None:
        with patch.object(bid_list_service, "get", side_effect=_db_down()):
            r = self.client.get(f"/bidList/update/{self.bid.id}", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/bidList/list?error=Could+not+load+bidList")

    def test_update_persistence_failure_rerenders_form(self) -> None:
        with patch("sqlalchemy.orm.Session.commit", side_effect=_db_down()):
            r = self.client.post(
                f"/bidList/update/{self.bid.id}",
                data={"account": "Changed", "type": "Type1"},
                follow_redirects=False,
            )
        self.assertEqual(r.status_code, 200)
        self.assertIn("Could not save bidList", r.text)
        self.db.expire_all()
        self.assertEqual(self.db.get(BidList, self.bid.id).account, "Account1")


class TestCurvePointValidation(WebTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.login_user()

    def test_non_numeric_term_and_value_rejected(self) -> None:
        r = self.client.post(
            "/curvePoint/validate",
            data={"curveId": "1", "term": "tutu", "value": "tata"},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn('action="/curvePoint/validate"', r.text)
        self.assertIn('value="tutu"', r.text)
        self.assertEqual(r.text.count('class="field-error"'), 2)
        self.assertEqual(self.count(CurvePoint), 0)

    def test_update_redirects_to_list(self) -> None:
        point = CurvePoint(curve_id=1, term=10.0, value=30.0)
        self.db.add(point)
        self.db.commit()
        self.db.refresh(point)
        r = self.client.post(
            f"/curvePoint/update/{point.id}",
            data={"curveId": "5", "term": "50.0", "value": "500.0"},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/curvePoint/list")
        self.db.expire_all()
        self.assertEqual(self.db.get(CurvePoint, point.id).value, 500.0)


class TestRuleNameFlow(WebTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.login_user()

    def test_json_field_round_trips_through_update_form(self) -> None:
        data = VALID_SUBMISSIONS["ruleName"][1]
        self.client.post("/ruleName/validate", data=data, follow_redirects=False)
        rule = self.db.query(RuleName).one()
        self.assertEqual(rule.json_str, "{}")
        r = self.client.get(f"/ruleName/update/{rule.id}")
        self.assertIn('value="{}"', r.text)
        self.assertIn('value="SELECT * FROM new"', r.text)


if __name__ == "__main__":
    unittest.main()
