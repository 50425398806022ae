import random

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

BOARDS = "boards"

# 보드 배경 이미지 후보. 생성 시 하나를 고르고 이후에는 바뀌지 않습니다.
BOARD_IMAGES: tuple[str, ...] = (
    "/placeholders/1.svg",
    "/placeholders/2.svg",
    "/placeholders/3.svg",
    "/placeholders/4.svg",
    "/placeholders/5.svg",
    "/placeholders/6.svg",
    "/placeholders/7.svg",
    "/placeholders/8.svg",
    "/placeholders/9.svg",
    "/placeholders/10.svg",
)

TITLE_MAX_LENGTH = 60


class Board(BaseModel):
    """
    boards 컬렉션 문서

    - title: 보드 제목. 수정 시 trim 기준 1~60자
    - orgId: 보드를 소유한 조직(tenant) ID
    - authorId / authorName: 생성자 정보. 생성 시점의 스냅샷이며 이후 갱신하지 않음
    - imageUrl: BOARD_IMAGES 중 하나
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    org_id: str
    author_id: str
    author_name: str
    image_url: str

    @classmethod
    def from_document(cls, doc: dict) -> "Board":
        return cls(
            id=str(doc["_id"]),
            title=doc["title"],
            org_id=doc["orgId"],
            author_id=doc["authorId"],
            author_name=doc["authorName"],
            image_url=doc["imageUrl"],
        )


def pick_image() -> str:
    """BOARD_IMAGES 중 하나를 균등 확률로 고릅니다."""
    return random.choice(BOARD_IMAGES)


def new_board_document(
    title: str, org_id: str, author_id: str, author_name: str
) -> dict:
    return {
        "title": title,
        "orgId": org_id,
        "authorId": author_id,
        "authorName": author_name,
        "imageUrl": pick_image(),
    }
