"""Shared test wiring: in-memory SQLite, fast bcrypt, fixed JWT secret."""

from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gatekeeper.api.deps import get_password_hasher, get_token_service
from gatekeeper.core.database import build_engine, get_db
from gatekeeper.core.security import PasswordHasher, TokenService
from gatekeeper.main import app
from gatekeeper.models import Base, Product

TEST_SECRET = "test-signing-secret-0123456789abcdef"
FAST_ROUNDS = 4


def make_engine() -> Engine:
    """One shared in-memory connection so every session sees the same tables."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    return engine


def make_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=FAST_ROUNDS)


def make_tokens(**kwargs: object) -> TokenService:
    return TokenService(TEST_SECRET, **kwargs)


def make_client(engine: Engine, tokens: TokenService | None = None) -> TestClient:
    """TestClient with DB, hasher and token service overridden. Call app.dependency_overrides.clear() after."""
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    token_service = tokens or make_tokens()
    hasher = make_hasher()

    def _get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    return TestClient(app)


def seed_products(engine: Engine) -> None:
    with Session(engine) as db:
        db.add_all(
            [
                Product(product_code="P-001", product="Widget", qty=10, per_price=2.5),
                Product(product_code="P-002", product="Gadget", qty=3, per_price=19.99),
            ]
        )
        db.commit()
