"""
Shared test fixtures
====================
Object store clients bound to the in-memory fakes in tests/fakes.py.
"""
import pytest

from blobstore.services.storage.s3_client import ObjectStoreClient

from tests.fakes import BASE_URL, BUCKET, FakeSession, InMemoryS3


@pytest.fixture
def fake_s3() -> InMemoryS3:
    return InMemoryS3()


@pytest.fixture
def fake_session(fake_s3) -> FakeSession:
    return FakeSession(fake_s3)


@pytest.fixture
def store(fake_session) -> ObjectStoreClient:
    """Client bound to the in-memory bucket"""
    return ObjectStoreClient(
        s3_config={"region_name": "us-east-1"},
        bucket_name=BUCKET,
        base_url=BASE_URL,
        session=fake_session,
    )
