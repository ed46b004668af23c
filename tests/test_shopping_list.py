"""
Tests for shopping lists: drafting, costing against supplier prices and submission.
"""

import pytest
from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_supplier, make_product
from domain.models import ShoppingList, Supplier, Transaction
from services.shopping_service import commission_for


@pytest.fixture
def catalogue(db_session: Session):
    """Two suppliers both selling eggs; only the grocer sells milk"""
    grocer = make_supplier(db_session, "green_grocer")
    farm = make_supplier(db_session, "farm_direct", commission_rate=0.1)
    return {
        "grocer": grocer,
        "farm": farm,
        "grocer_eggs": make_product(db_session, grocer, price=500, stock_level=2),
        "farm_eggs": make_product(db_session, farm, price=450),
        "milk": make_product(db_session, grocer, "Whole milk 1L", price=129, stock_level=10),
    }


def _item(product, quantity=1):
    return {"productId": product.id, "quantity": quantity, "supplierId": product.supplier_id}


def test_commission_rounds_half_up():
    assert commission_for(1350, 0.05) == 68
    assert commission_for(1000, 0.05) == 50
    assert commission_for(0, 0.05) == 0


def test_create_list_starts_as_draft(client, db_session: Session, catalogue):
    r = client.post(
        "/api/shopping-list",
        json={"items": [_item(catalogue["grocer_eggs"], 2), _item(catalogue["milk"])]},
    )

    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "draft"
    assert body["items"][0] == {
        "productId": catalogue["grocer_eggs"].id,
        "quantity": 2,
        "supplierId": catalogue["grocer"].id,
    }


def test_create_list_with_mismatched_supplier_is_rejected(client, db_session: Session, catalogue):
    bad = {
        "productId": catalogue["milk"].id,
        "quantity": 1,
        "supplierId": catalogue["farm"].id,
    }

    r = client.post("/api/shopping-list", json={"items": [_item(catalogue["farm_eggs"]), bad]})

    assert r.status_code == 400
    errors = r.json()["details"]["errors"]
    assert [e["index"] for e in errors] == [1]
    assert db_session.query(ShoppingList).count() == 0


def test_create_list_with_zero_quantity_is_rejected(client, catalogue):
    r = client.post("/api/shopping-list", json={"items": [_item(catalogue["milk"], 0)]})

    assert r.status_code == 400
    assert r.json()["kind"] == "validation_error"


def test_patch_replaces_items(client, catalogue):
    created = client.post(
        "/api/shopping-list", json={"items": [_item(catalogue["milk"])]}
    ).json()

    r = client.patch(
        f"/api/shopping-list/{created['id']}",
        json={"items": [_item(catalogue["farm_eggs"], 3)]},
    )

    assert r.status_code == 200
    assert r.json()["items"] == [_item(catalogue["farm_eggs"], 3)]
    assert r.json()["status"] == "draft"


def test_patch_unknown_list_is_not_found(client):
    r = client.patch("/api/shopping-list/9999", json={"status": "pending"})

    assert r.status_code == 404


def test_summary_points_to_cheapest_supplier(client, catalogue):
    created = client.post(
        "/api/shopping-list",
        json={"items": [_item(catalogue["grocer_eggs"], 3), _item(catalogue["milk"], 2)]},
    ).json()

    r = client.get(f"/api/shopping-list/{created['id']}/summary")

    assert r.status_code == 200
    summary = r.json()
    eggs, milk = summary["lines"]
    assert eggs["lineTotal"] == 1500
    assert eggs["cheapestSupplierId"] == catalogue["farm"].id
    assert eggs["cheapestUnitPrice"] == 450
    assert eggs["potentialSavings"] == 150
    assert eggs["inStock"] is False  # only 2 boxes at the grocer
    assert milk["cheapestSupplierId"] == catalogue["grocer"].id
    assert milk["potentialSavings"] == 0
    assert summary["total"] == 1758
    assert summary["cheapestTotal"] == 1608
    assert summary["potentialSavings"] == 150
    assert summary["outOfStockCount"] == 1


def test_submit_records_one_transaction_per_supplier(client, db_session: Session, catalogue):
    created = client.post(
        "/api/shopping-list",
        json={
            "items": [
                _item(catalogue["grocer_eggs"], 2),
                _item(catalogue["milk"], 3),
                _item(catalogue["farm_eggs"], 1),
            ],
            "userId": None,
        },
    ).json()

    r = client.post(f"/api/shopping-list/{created['id']}/submit")

    assert r.status_code == 200
    body = r.json()
    assert body["shoppingList"]["status"] == "pending"
    by_supplier = {t["supplierId"]: t for t in body["transactions"]}
    grocer_tx = by_supplier[catalogue["grocer"].id]
    farm_tx = by_supplier[catalogue["farm"].id]
    assert grocer_tx["amount"] == 1387
    assert grocer_tx["commission"] == 69  # 69.35
    assert farm_tx["amount"] == 450
    assert farm_tx["commission"] == 45

    grocer = db_session.get(Supplier, catalogue["grocer"].id)
    db_session.refresh(grocer)
    assert grocer.total_revenue == 1387
    assert grocer.total_commission == 69
    assert db_session.query(Transaction).count() == 2


def test_submit_twice_conflicts(client, db_session: Session, catalogue):
    created = client.post(
        "/api/shopping-list", json={"items": [_item(catalogue["milk"])]}
    ).json()

    assert client.post(f"/api/shopping-list/{created['id']}/submit").status_code == 200
    r = client.post(f"/api/shopping-list/{created['id']}/submit")

    assert r.status_code == 409
    assert r.json()["details"] == {"status": "pending"}
    assert db_session.query(Transaction).count() == 1


def test_submit_empty_list_is_rejected(client, db_session: Session):
    created = client.post("/api/shopping-list", json={"items": []}).json()

    r = client.post(f"/api/shopping-list/{created['id']}/submit")

    assert r.status_code == 400
    assert db_session.query(Transaction).count() == 0


def test_list_shopping_lists_newest_first(client, catalogue):
    first = client.post("/api/shopping-list", json={"items": [_item(catalogue["milk"])]}).json()
    second = client.post("/api/shopping-list", json={"items": []}).json()

    r = client.get("/api/shopping-list")

    assert [sl["id"] for sl in r.json()] == [second["id"], first["id"]]


def test_transactions_of_submitted_list(client, catalogue):
    created = client.post(
        "/api/shopping-list",
        json={"items": [_item(catalogue["milk"], 2), _item(catalogue["farm_eggs"])]},
    ).json()
    assert client.get(f"/api/shopping-list/{created['id']}/transactions").json() == []

    client.post(f"/api/shopping-list/{created['id']}/submit")
    r = client.get(f"/api/shopping-list/{created['id']}/transactions")

    assert r.status_code == 200
    assert [t["amount"] for t in r.json()] == [258, 450]
    assert client.get("/api/shopping-list/9999/transactions").status_code == 404


def test_patch_cannot_reopen_submitted_list(client, db_session: Session, catalogue):
    created = client.post(
        "/api/shopping-list", json={"items": [_item(catalogue["grocer_eggs"], 2)]}
    ).json()
    client.post(f"/api/shopping-list/{created['id']}/submit")

    r = client.patch(f"/api/shopping-list/{created['id']}", json={"status": "draft"})

    assert r.status_code == 409
    assert r.json()["details"] == {"status": "pending", "requested": "draft"}
    assert client.post(f"/api/shopping-list/{created['id']}/submit").status_code == 409

    grocer = db_session.get(Supplier, catalogue["grocer"].id)
    db_session.refresh(grocer)
    assert grocer.total_revenue == 1000
    assert db_session.query(Transaction).count() == 1


def test_patch_cannot_mark_draft_pending(client, db_session: Session, catalogue):
    created = client.post(
        "/api/shopping-list", json={"items": [_item(catalogue["milk"])]}
    ).json()

    r = client.patch(f"/api/shopping-list/{created['id']}", json={"status": "pending"})

    assert r.status_code == 409
    assert db_session.get(ShoppingList, created["id"]).status == "draft"

    submitted = client.post(f"/api/shopping-list/{created['id']}/submit")
    assert submitted.status_code == 200
    assert db_session.query(Transaction).count() == 1


def test_patch_restating_current_status_is_allowed(client, catalogue):
    created = client.post(
        "/api/shopping-list", json={"items": [_item(catalogue["milk"])]}
    ).json()

    r = client.patch(
        f"/api/shopping-list/{created['id']}",
        json={"status": "draft", "items": [_item(catalogue["milk"], 4)]},
    )

    assert r.status_code == 200
    assert r.json()["items"][0]["quantity"] == 4


def test_items_of_submitted_list_are_frozen(client, db_session: Session, catalogue):
    created = client.post(
        "/api/shopping-list", json={"items": [_item(catalogue["milk"], 2)]}
    ).json()
    client.post(f"/api/shopping-list/{created['id']}/submit")

    r = client.patch(f"/api/shopping-list/{created['id']}", json={"items": []})

    assert r.status_code == 409
    assert r.json()["kind"] == "conflict"
    stored = db_session.get(ShoppingList, created["id"])
    db_session.refresh(stored)
    assert stored.items == [_item(catalogue["milk"], 2)]


def test_summary_marks_items_no_longer_sold_as_unavailable(client, db_session: Session, catalogue):
    created = client.post(
        "/api/shopping-list",
        json={
            "items": [
                _item(catalogue["milk"], 2),
                _item(catalogue["farm_eggs"], 1),
                _item(catalogue["grocer_eggs"], 1),
            ]
        },
    ).json()
    db_session.delete(catalogue["milk"])
    catalogue["grocer_eggs"].supplier_id = catalogue["farm"].id
    db_session.commit()

    r = client.get(f"/api/shopping-list/{created['id']}/summary")

    assert r.status_code == 200
    summary = r.json()
    assert [line["available"] for line in summary["lines"]] == [False, True, False]
    missing = summary["lines"][0]
    assert missing["unitPrice"] is None
    assert missing["lineTotal"] == 0
    assert summary["total"] == 450
    assert summary["unavailableCount"] == 2
    assert summary["outOfStockCount"] == 0
