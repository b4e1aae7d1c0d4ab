"""Shared fixtures: a fresh SQLite database per test, seeded users, API client."""

import os
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker

from epibux.config import settings
from epibux.database import Base, build_engine, get_db, run_transaction
from epibux.main import app
from epibux.middleware.rate_limit import limiter
from epibux.models import Listing, User


@pytest.fixture
def engine(tmp_path):
    # A file, not :memory:, so separate sessions get separate connections.
    engine = build_engine(f"sqlite:///{tmp_path / 'epibux_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db):
    """alice sells, bob and carol buy. Returns uid by username."""
    db.add_all([
        User(uid="alice-uid", username="alice", balance=500),
        User(uid="bob-uid", username="bob", balance=100),
        User(uid="carol-uid", username="carol", balance=100),
    ])
    db.commit()
    return {"alice": "alice-uid", "bob": "bob-uid", "carol": "carol-uid"}


@pytest.fixture
def make_listing(db, users):
    """Insert a listing straight into the store, accepted by default."""

    def _make(
        seller_uid: str = "alice-uid",
        price: int = 50,
        is_infinite: bool = False,
        stock: int = 1,
        is_accepted: bool = True,
        title: str = "Sticker pack",
        link: str = "https://example.com/sticker-pack",
    ) -> str:
        seller = db.get(User, seller_uid)
        listing = Listing(
            title=title,
            description="Ten holographic stickers",
            price=price,
            link=link,
            is_infinite=is_infinite,
            stock=None if is_infinite else stock,
            seller_uid=seller_uid,
            seller_username=seller.username if seller else "ghost",
            is_accepted=is_accepted,
        )
        db.add(listing)
        db.commit()
        return listing.id

    return _make


def balance_of(db, uid: str) -> int:
    """Read a balance as currently committed."""
    db.expire_all()
    return db.get(User, uid).balance


def make_token(uid: str, expires_in: timedelta = timedelta(hours=1), **claims) -> str:
    """Sign a token the way the identity provider would."""
    payload = {"sub": uid, "exp": datetime.now(timezone.utc) + expires_in, **claims}
    return jwt.encode(payload, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)


@pytest.fixture
def auth_headers():
    def _headers(uid: str) -> dict:
        return {"Authorization": f"Bearer {make_token(uid)}"}

    return _headers


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    try:
        # No context manager: startup would create tables on the configured engine.
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = settings.RATE_LIMIT_ENABLED


def commit_after(monkeypatch, module, competitor):
    """Run ``competitor`` once, after the next transaction body in ``module`` has
    done its reads and staged its writes, but before that transaction commits.
    """
    pending = [competitor]

    def interleaved_run(db, body):
        def staged_then_raced(session):
            result = body(session)
            if pending:
                pending.pop()()
            return result

        return run_transaction(db, staged_then_raced)

    monkeypatch.setattr(module, "run_transaction", interleaved_run)
