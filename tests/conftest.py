from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from asgi_lifespan import LifespanManager
from mongomock_motor import AsyncMongoMockClient


@pytest.fixture
async def test_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    MongoDB 연결 없이 API 테스트를 위한 클라이언트.
    lifespan의 MongoDB startup/shutdown을 mock합니다.
    """
    from whiteboard.dependencies import mongodb
    from whiteboard.main import app

    with (
        patch.object(mongodb, "startup", AsyncMock(return_value=None)),
        patch.object(mongodb, "shutdown", AsyncMock(return_value=None)),
    ):
        async with (
            httpx.AsyncClient(
                transport=httpx.ASGITransport(app=app),
                base_url="http://test",
            ) as async_client,
            LifespanManager(app),
        ):
            yield async_client


@pytest.fixture
async def db():
    """
    테스트마다 새로 만드는 in-memory MongoDB.
    운영과 동일하게 인덱스를 생성합니다.
    """
    from whiteboard.dependencies.mongodb import ensure_indexes

    database = AsyncMongoMockClient()["whiteboard_test"]
    await ensure_indexes(database)
    return database


@pytest.fixture
async def api_client(db) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    get_database dependency를 in-memory DB로 override한 테스트 클라이언트.
    """
    from whiteboard.dependencies.mongodb import get_database
    from whiteboard.main import app

    app.dependency_overrides[get_database] = lambda: db
    try:
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_database, None)


def _make_user(subject: str, name: str) -> dict:
    from whiteboard.dependencies.auth import create_access_token

    token = create_access_token(subject, name)
    return {
        "subject": subject,
        "name": name,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def member() -> dict:
    """보드를 만들고 즐겨찾기하는 일반 사용자. {subject, name, headers}"""
    return _make_user("user_member", "테스트 회원")


@pytest.fixture
def member_headers(member: dict) -> dict:
    return member["headers"]


@pytest.fixture
def other_member() -> dict:
    return _make_user("user_other", "다른 회원")


@pytest.fixture
async def board_id(db, member: dict) -> str:
    """테스트용 보드를 DB에 직접 생성합니다."""
    from whiteboard.models.board import BOARDS

    result = await db[BOARDS].insert_one(
        {
            "title": "테스트 보드",
            "orgId": "org1",
            "authorId": member["subject"],
            "authorName": member["name"],
            "imageUrl": "/placeholders/1.svg",
        }
    )
    return str(result.inserted_id)
