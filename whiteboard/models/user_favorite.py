from bson import ObjectId

USER_FAVORITES = "userFavorites"


def favorite_key(user_id: str, board_id: ObjectId) -> dict:
    """by_user_board 인덱스로 조회하는 (userId, boardId) 필터"""
    return {"userId": user_id, "boardId": board_id}


def new_favorite_document(user_id: str, board_id: ObjectId, org_id: str) -> dict:
    """
    userFavorites 컬렉션 문서

    boardId는 boards._id를 가리키지만 MongoDB가 참조 무결성을 보장하지 않으므로
    보드 삭제 시 서비스에서 함께 지워야 합니다.
    """
    return {"userId": user_id, "boardId": board_id, "orgId": org_id}
