"""地域イベントフィードのドメインモデル"""
from dataclasses import dataclass, field
from typing import Any, Optional

from ....shared.exceptions.errors import DecodeError


@dataclass(frozen=True)
class EventFeedSpec:
    """
    ソウル市オープンデータのサービス定義

    fields は LocalEvent の属性名 -> 候補となるAPIフィールド名（先頭優先）。
    """

    service: str
    fields: dict[str, tuple[str, ...]]


CULTURAL_EVENTS = EventFeedSpec(
    service="culturalEventInfo",
    fields={
        "title": ("TITLE",),
        "district": ("GUNAME",),
        "place": ("PLACE",),
        "period": ("DATE",),
        "category": ("CODENAME",),
        "url": ("ORG_LINK", "HMPG_ADDR"),
        "image_url": ("MAIN_IMG",),
    },
)

EDUCATION_EVENTS = EventFeedSpec(
    service="ListPublicReservationEducation",
    fields={
        "title": ("SVCNM",),
        "district": ("AREANM",),
        "place": ("PLACENM",),
        "period": ("SVCOPNBGNDT",),
        "category": ("MINCLASSNM", "MAXCLASSNM"),
        "url": ("SVCURL",),
        "image_url": ("IMGURL",),
    },
)

NEW_ISSUES = EventFeedSpec(
    service="SeoulNewsList",
    fields={
        "title": ("TITLE", "SUBJECT"),
        "district": ("GUNAME", "DEPT_NAME"),
        "place": (),
        "period": ("REG_DATE", "WRITE_DAY"),
        "category": ("CATEGORY", "CATE_NAME"),
        "url": ("LINK", "URL"),
        "image_url": ("IMAGE", "THUMBNAIL"),
    },
)


@dataclass
class LocalEvent:
    """地域のニュース・文化イベント・教育講座の1件"""

    title: str
    district: Optional[str] = None  # 자치구名（例: "강남구"）
    place: Optional[str] = None
    period: Optional[str] = None
    category: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Any, spec: EventFeedSpec) -> "LocalEvent":
        """
        APIの1行からイベントを生成

        Raises:
            DecodeError: 行が辞書でない、またはタイトルが無い場合
        """
        if not isinstance(row, dict):
            raise DecodeError(f"Event row must be an object, got {type(row).__name__}")

        values: dict[str, Optional[str]] = {}
        for attr, keys in spec.fields.items():
            values[attr] = next(
                (str(row[key]).strip() for key in keys if row.get(key) not in (None, "")),
                None,
            )

        if not values.get("title"):
            raise DecodeError(f"{spec.service} row has no title")

        return cls(**values)


@dataclass
class LocalEventFeed:
    """フィードの取得結果（部分的成功）"""

    service: str
    total_count: int = 0
    events: list[LocalEvent] = field(default_factory=list)
    skipped_count: int = 0
