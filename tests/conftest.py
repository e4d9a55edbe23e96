# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from feedback_stage.db.session import Base
from feedback_stage.db.session import get_db as app_get_session
from feedback_stage.db.time import utcnow
from feedback_stage.main import app as fastapi_app
from feedback_stage.models import Feedback, PanelMembership, Role, User, Village, Vote

TEST_DB_URL = "sqlite://"

_PANEL_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test so commits and rollbacks are real."""
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def now() -> datetime:
    """A single reference instant shared by a test and the code under test."""
    return utcnow()


@pytest.fixture()
def make_village(db_session: Session) -> Callable[..., Village]:
    def _make(priority: str = "medium", name: str = "Village") -> Village:
        village = Village(name=name, priority=priority)
        db_session.add(village)
        db_session.commit()
        return village

    return _make


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make(
        role: str = Role.USER,
        village: Village | None = None,
        active_panels: int = 0,
        inactive_panels: int = 0,
        user_id: str | None = None,
    ) -> User:
        user = User(
            role=role,
            display_name=f"{role} user",
            current_village_id=village.id if village else None,
        )
        if user_id is not None:
            user.id = user_id
        db_session.add(user)
        db_session.flush()
        for active, total in ((True, active_panels), (False, inactive_panels)):
            for _ in range(total):
                db_session.add(
                    PanelMembership(
                        panel_id=f"pan_{next(_PANEL_COUNTER)}",
                        user_id=user.id,
                        active=active,
                    )
                )
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def make_feedback(db_session: Session) -> Callable[..., Feedback]:
    def _make(
        title: str = "Add dark mode",
        body: str = "",
        village: Village | None = None,
        feedback_id: str | None = None,
    ) -> Feedback:
        feedback = Feedback(
            title=title,
            body=body,
            village_id=village.id if village else None,
        )
        if feedback_id is not None:
            feedback.id = feedback_id
        db_session.add(feedback)
        db_session.commit()
        return feedback

    return _make


@pytest.fixture()
def make_vote(db_session: Session, now: datetime) -> Callable[..., Vote]:
    def _make(feedback: Feedback, user: User, weight: float = 1.0, age_days: float = 0.0) -> Vote:
        vote = Vote(
            feedback_id=feedback.id,
            user_id=user.id,
            weight=weight,
            created_at=now - timedelta(days=age_days),
        )
        db_session.add(vote)
        db_session.commit()
        return vote

    return _make


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client

