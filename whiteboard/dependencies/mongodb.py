import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from whiteboard.config.config import settings
from whiteboard.models.board import BOARDS
from whiteboard.models.user_favorite import USER_FAVORITES

logger = logging.getLogger(__name__)

# Motor(pymongo)는 내부적으로 connection pooling을 지원합니다.
# maxPoolSize로 최대 connection 수를 제한하고,
# minPoolSize로 유휴 상태에서도 유지할 최소 connection 수를 설정합니다.
_client = AsyncIOMotorClient(
    "mongodb://{user}:{passwd}@{host}:{port}".format(
        user=settings.mongodb.user,
        passwd=settings.mongodb.passwd,
        host=settings.mongodb.host,
        port=settings.mongodb.port,
    ),
    maxPoolSize=10,
    minPoolSize=10,
)

_database: AsyncIOMotorDatabase = _client[settings.mongodb.db]


def get_database() -> AsyncIOMotorDatabase:
    """
    `db: AsyncIOMotorDatabase = Depends(get_database)`로 사용
    """
    return _database


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    board 관련 컬렉션의 인덱스를 생성합니다 (이미 존재하면 스킵).

    by_user_board는 unique 인덱스이므로 동시에 들어온 즐겨찾기 요청이
    같은 (userId, boardId) 문서를 두 번 만들 수 없습니다.
    """
    await db[USER_FAVORITES].create_index(
        [("userId", 1), ("boardId", 1)], name="by_user_board", unique=True
    )
    await db[BOARDS].create_index([("orgId", 1)], name="by_org")


async def startup() -> None:
    """서버 시작 시 MongoDB 연결을 확인하고 인덱스를 생성합니다."""
    result = await _database.command("ping")
    logger.info("MongoDB 연결 완료: ping=%s", result.get("ok"))
    await ensure_indexes(_database)
    logger.info("MongoDB 인덱스 초기화 완료")


async def shutdown() -> None:
    """서버 종료 시 MongoDB 연결을 닫습니다."""
    _client.close()
