"""
Tests for the mocked supplier OAuth handshake.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_supplier
from domain.models import OAuthState, Supplier


def test_full_handshake_links_supplier(client, db_session: Session):
    grocer = make_supplier(db_session)

    start = client.get("/api/auth/google", params={"supplierId": grocer.id})
    assert start.status_code == 200
    started = start.json()
    assert started["status"] == "success"
    assert started["authUrl"].startswith("/api/auth/google/callback?")
    assert f"state={started['state']}" in started["authUrl"]

    callback = client.get(started["authUrl"])
    assert callback.status_code == 200
    body = callback.json()
    assert body["supplierId"] == grocer.id
    assert body["provider"] == "google"
    assert body["code"].startswith("mock-")

    linked = client.get("/api/suppliers").json()[0]
    assert linked["isAuthenticated"] is True
    assert linked["oauthProvider"] == "google"
    assert linked["tokenExpiresAt"] is not None

    # The state is single use
    assert db_session.query(OAuthState).count() == 0
    assert client.get(started["authUrl"]).status_code == 400


def test_start_with_unsupported_provider(client, db_session: Session):
    grocer = make_supplier(db_session)

    r = client.get("/api/auth/myspace", params={"supplierId": grocer.id})

    assert r.status_code == 400
    assert r.json()["details"]["supported"] == ["google", "microsoft"]


def test_start_for_unknown_supplier(client):
    r = client.get("/api/auth/microsoft", params={"supplierId": 9999})

    assert r.status_code == 404


def test_callback_with_unknown_state(client, db_session: Session):
    make_supplier(db_session)

    r = client.get("/api/auth/google/callback", params={"state": "forged", "code": "x"})

    assert r.status_code == 400
    assert r.json()["kind"] == "validation_error"


def test_callback_on_other_provider_is_rejected(client, db_session: Session):
    grocer = make_supplier(db_session)
    state = client.get("/api/auth/google", params={"supplierId": grocer.id}).json()["state"]

    r = client.get("/api/auth/microsoft/callback", params={"state": state})

    assert r.status_code == 400
    assert r.json()["details"] == {"expected": "google", "received": "microsoft"}
    assert db_session.get(Supplier, grocer.id).access_token is None


def test_callback_with_expired_state(client, db_session: Session):
    grocer = make_supplier(db_session)
    db_session.add(
        OAuthState(
            state="stale-state",
            supplier_id=grocer.id,
            provider="google",
            expires_at=datetime.now(timezone.utc) - timedelta(minutes=5),
        )
    )
    db_session.commit()

    r = client.get("/api/auth/google/callback", params={"state": "stale-state"})

    assert r.status_code == 400
    assert "expired" in r.json()["message"]
    assert db_session.query(OAuthState).count() == 0


def test_start_purges_expired_states(client, db_session: Session):
    grocer = make_supplier(db_session)
    db_session.add(
        OAuthState(
            state="stale-state",
            supplier_id=grocer.id,
            provider="microsoft",
            expires_at=datetime.now(timezone.utc) - timedelta(minutes=5),
        )
    )
    db_session.commit()

    fresh = client.get("/api/auth/microsoft", params={"supplierId": grocer.id}).json()

    states = [row.state for row in db_session.query(OAuthState).all()]
    assert states == [fresh["state"]]
