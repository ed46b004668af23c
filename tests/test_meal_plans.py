"""
Tests for meal planning: one plan per day, slot merging and the allow-listed PATCH.
"""

from datetime import date

from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_recipe
from domain.models import MealPlan, User


def _post_plan(client, day: str, **slots):
    return client.post("/api/meal-plans", json={"date": day, "recipes": slots})


def test_create_plan_returns_201_with_location(client, db_session: Session):
    breakfast = make_recipe(db_session, "Overnight oats")

    r = _post_plan(client, "2026-03-02", breakfast=breakfast.id)

    assert r.status_code == 201
    body = r.json()
    assert body["date"] == "2026-03-02"
    assert body["recipes"] == {"breakfast": breakfast.id, "lunch": None, "dinner": None}
    assert r.headers["location"] == f"/api/meal-plans/{body['id']}"


def test_posting_same_day_merges_into_existing_plan(client, db_session: Session):
    oats = make_recipe(db_session, "Overnight oats")
    soup = make_recipe(db_session, "Lentil soup")

    first = _post_plan(client, "2026-03-02", breakfast=oats.id)
    second = _post_plan(client, "2026-03-02", dinner=soup.id)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["recipes"] == {
        "breakfast": oats.id,
        "lunch": None,
        "dinner": soup.id,
    }
    assert db_session.query(MealPlan).count() == 1


def test_list_plans_filters_by_date_range(client, db_session: Session):
    for day in ("2026-03-01", "2026-03-05", "2026-03-09"):
        _post_plan(client, day)

    r = client.get("/api/meal-plans", params={"from": "2026-03-02", "to": "2026-03-09"})

    assert r.status_code == 200
    assert [p["date"] for p in r.json()] == ["2026-03-05", "2026-03-09"]


def test_create_plan_with_bad_date_is_rejected(client, db_session: Session):
    r = client.post("/api/meal-plans", json={"date": "next tuesday"})

    assert r.status_code == 400
    assert r.json()["kind"] == "validation_error"
    assert db_session.query(MealPlan).count() == 0


def test_patch_unknown_plan_returns_404_and_changes_nothing(client, db_session: Session):
    _post_plan(client, "2026-03-02")

    r = client.patch("/api/meal-plans/9999", json={"date": "2026-04-01"})

    assert r.status_code == 404
    assert r.json()["kind"] == "not_found"
    plans = db_session.query(MealPlan).all()
    assert len(plans) == 1
    assert plans[0].date == date(2026, 3, 2)


def test_patch_ignores_fields_outside_allow_list(client, db_session: Session):
    created = _post_plan(client, "2026-03-02").json()

    r = client.patch(
        f"/api/meal-plans/{created['id']}",
        json={"date": "2026-03-03", "id": 777, "userId": 42, "createdAt": "1999-01-01T00:00:00"},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["id"] == created["id"]
    assert body["date"] == "2026-03-03"
    assert body["userId"] is None
    assert body["createdAt"] == created["createdAt"]


def test_patch_null_slot_clears_it_and_keeps_others(client, db_session: Session):
    oats = make_recipe(db_session, "Overnight oats")
    soup = make_recipe(db_session, "Lentil soup")
    created = _post_plan(client, "2026-03-02", breakfast=oats.id, dinner=soup.id).json()

    r = client.patch(
        f"/api/meal-plans/{created['id']}", json={"recipes": {"breakfast": None}}
    )

    assert r.status_code == 200
    assert r.json()["recipes"] == {"breakfast": None, "lunch": None, "dinner": soup.id}


def test_patch_moving_onto_planned_day_conflicts(client, db_session: Session):
    monday = _post_plan(client, "2026-03-02").json()
    tuesday = _post_plan(client, "2026-03-03").json()

    r = client.patch(f"/api/meal-plans/{tuesday['id']}", json={"date": monday["date"]})

    assert r.status_code == 409
    body = r.json()
    assert body["kind"] == "conflict"
    assert body["details"]["conflictingPlanId"] == monday["id"]


def test_delete_plan(client, db_session: Session):
    created = _post_plan(client, "2026-03-02").json()

    assert client.delete(f"/api/meal-plans/{created['id']}").status_code == 204
    assert client.delete(f"/api/meal-plans/{created['id']}").status_code == 404


def test_create_plan_for_unknown_user_is_rejected(client, db_session: Session):
    r = client.post("/api/meal-plans", json={"date": "2026-03-02", "userId": 4242})

    assert r.status_code == 400
    body = r.json()
    assert body["kind"] == "validation_error"
    assert body["details"] == {"userId": 4242}
    assert db_session.query(MealPlan).count() == 0


def test_create_plan_for_existing_user(client, db_session: Session):
    user = User(name="Alice", email="alice@example.com")
    db_session.add(user)
    db_session.commit()

    r = client.post("/api/meal-plans", json={"date": "2026-03-02", "userId": user.id})

    assert r.status_code == 201
    assert r.json()["userId"] == user.id
