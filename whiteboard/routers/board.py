import logging
import re
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, Path, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from whiteboard.dependencies.auth import Identity, get_identity
from whiteboard.dependencies.mongodb import get_database
from whiteboard.exceptions import AlreadyFavorited, NotFound, ValidationError
from whiteboard.models.board import (
    BOARDS,
    TITLE_MAX_LENGTH,
    Board,
    new_board_document,
)
from whiteboard.models.user_favorite import (
    USER_FAVORITES,
    favorite_key,
    new_favorite_document,
)

logger = logging.getLogger(__name__)

_OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
_LIST_LIMIT = 100

router = APIRouter(prefix="/boards", tags=["Boards"])


class CreateBoardRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    org_id: str
    title: str


class UpdateBoardRequest(BaseModel):
    title: str


class FavoriteBoardRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    org_id: str


class BoardIdResponse(BaseModel):
    id: str


class BoardListItem(Board):
    is_favorite: bool


async def _get_board(db: AsyncIOMotorDatabase, board_id: ObjectId) -> dict:
    board = await db[BOARDS].find_one({"_id": board_id})
    if board is None:
        raise NotFound("Board not found")
    return board


async def _favorite_board_ids(
    db: AsyncIOMotorDatabase, user_id: str, board_ids: list[ObjectId]
) -> set[ObjectId]:
    """board_ids 중 user_id가 즐겨찾기한 보드 ID"""
    docs = (
        await db[USER_FAVORITES]
        .find({"userId": user_id, "boardId": {"$in": board_ids}})
        .to_list(None)
    )
    return {doc["boardId"] for doc in docs}


@router.post("", response_model=BoardIdResponse, status_code=201)
async def create_board(
    body: CreateBoardRequest,
    identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BoardIdResponse:
    """보드 생성. 배경 이미지는 후보 중 하나를 무작위로 고릅니다."""
    result = await db[BOARDS].insert_one(
        new_board_document(
            title=body.title,
            org_id=body.org_id,
            author_id=identity.subject,
            author_name=identity.name,
        )
    )
    logger.info(
        "보드 생성: board_id=%s org_id=%s author_id=%s",
        result.inserted_id,
        body.org_id,
        identity.subject,
    )
    return BoardIdResponse(id=str(result.inserted_id))


@router.get("", response_model=list[BoardListItem])
async def get_boards(
    org_id: str = Query(alias="orgId"),
    search: Optional[str] = Query(default=None),
    favorites: bool = Query(default=False),
    identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> list[BoardListItem]:
    """조직의 보드 목록 (최신순, 최대 100개). 호출자의 즐겨찾기 여부를 함께 반환합니다."""
    query: dict = {"orgId": org_id}
    if favorites:
        # 즐겨찾기 문서의 orgId가 아니라 보드의 orgId로 조직을 거릅니다.
        favorite_docs = (
            await db[USER_FAVORITES].find({"userId": identity.subject}).to_list(None)
        )
        query["_id"] = {"$in": [doc["boardId"] for doc in favorite_docs]}
    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}

    docs = (
        await db[BOARDS].find(query).sort("_id", -1).limit(_LIST_LIMIT).to_list(None)
    )
    favorite_ids = await _favorite_board_ids(
        db, identity.subject, [doc["_id"] for doc in docs]
    )
    return [
        BoardListItem(
            **Board.from_document(doc).model_dump(),
            is_favorite=doc["_id"] in favorite_ids,
        )
        for doc in docs
    ]


@router.get("/{board_id}", response_model=Optional[Board])
async def get_board(
    board_id: str = Path(pattern=_OBJECT_ID_PATTERN),
    _identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Optional[Board]:
    """보드 단건 조회. 없으면 에러 대신 null을 반환합니다."""
    # 로그인은 요구하지만 작성자/조직 권한은 확인하지 않습니다.
    doc = await db[BOARDS].find_one({"_id": ObjectId(board_id)})
    if doc is None:
        return None
    return Board.from_document(doc)


@router.patch("/{board_id}", response_model=Board)
async def update_board(
    body: UpdateBoardRequest,
    board_id: str = Path(pattern=_OBJECT_ID_PATTERN),
    _identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Board:
    """보드 제목 수정. 검증은 trim한 값으로 하고 저장은 입력값 그대로 합니다."""
    title = body.title.strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError("Title too long")

    doc = await db[BOARDS].find_one_and_update(
        {"_id": ObjectId(board_id)},
        {"$set": {"title": body.title}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound("Board not found")
    return Board.from_document(doc)


@router.delete("/{board_id}", status_code=204)
async def delete_board(
    board_id: str = Path(pattern=_OBJECT_ID_PATTERN),
    identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> None:
    """
    보드 삭제. 호출자의 즐겨찾기가 있으면 먼저 지웁니다.
    존재하지 않는 보드를 삭제해도 에러가 아닙니다.
    """
    oid = ObjectId(board_id)
    existing = await db[USER_FAVORITES].find_one(favorite_key(identity.subject, oid))
    if existing is not None:
        await db[USER_FAVORITES].delete_one({"_id": existing["_id"]})

    result = await db[BOARDS].delete_one({"_id": oid})
    logger.info(
        "보드 삭제: board_id=%s deleted=%d user_id=%s",
        board_id,
        result.deleted_count,
        identity.subject,
    )


@router.post("/{board_id}/favorite", response_model=Board)
async def favorite_board(
    body: FavoriteBoardRequest,
    board_id: str = Path(pattern=_OBJECT_ID_PATTERN),
    identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Board:
    board = await _get_board(db, ObjectId(board_id))

    key = favorite_key(identity.subject, board["_id"])
    if await db[USER_FAVORITES].find_one(key) is not None:
        raise AlreadyFavorited()

    # 동시에 들어온 요청은 by_user_board unique 인덱스가 막습니다.
    try:
        await db[USER_FAVORITES].insert_one(
            new_favorite_document(identity.subject, board["_id"], body.org_id)
        )
    except DuplicateKeyError as e:
        raise AlreadyFavorited() from e

    logger.info("즐겨찾기 추가: board_id=%s user_id=%s", board_id, identity.subject)
    return Board.from_document(board)


@router.delete("/{board_id}/favorite", response_model=Board)
async def unfavorite_board(
    board_id: str = Path(pattern=_OBJECT_ID_PATTERN),
    identity: Identity = Depends(get_identity),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Board:
    board = await _get_board(db, ObjectId(board_id))

    existing = await db[USER_FAVORITES].find_one(
        favorite_key(identity.subject, board["_id"])
    )
    if existing is None:
        raise NotFound("Favorited board not found")

    await db[USER_FAVORITES].delete_one({"_id": existing["_id"]})
    logger.info("즐겨찾기 해제: board_id=%s user_id=%s", board_id, identity.subject)
    return Board.from_document(board)
