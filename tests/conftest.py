import os
import tempfile

# Keep the app's import-time database and bucket out of the working tree
_workdir = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_workdir}/app.db")
os.environ.setdefault("STORAGE_ROOT", os.path.join(_workdir, "storage"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.services.storage import ObjectStorage, get_storage


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage(tmp_path):
    bucket = ObjectStorage(
        root=str(tmp_path),
        bucket="test-bucket",
        secret="test-secret",
        base_url="/api/storage/object",
    )
    bucket.ensure_bucket()
    return bucket


@pytest.fixture
def override_dependencies(session_factory, storage):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_dependencies):
    return TestClient(app)
