"""投稿機能のドメインモデル"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from google.cloud.firestore import GeoPoint

from ....shared.exceptions.errors import DecodeError, ValidationError
from .enums import PostCategory


@dataclass(frozen=True)
class GeoCoordinate:
    """緯度・経度（度）"""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValidationError(
                f"Coordinate must be finite: ({self.latitude}, {self.longitude})"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError(f"Longitude out of range: {self.longitude}")

    def to_geo_point(self) -> GeoPoint:
        """FirestoreのGeoPointに変換"""
        return GeoPoint(self.latitude, self.longitude)

    @classmethod
    def from_value(cls, value: Any) -> "GeoCoordinate":
        """
        GeoPoint、latitude/longitude属性を持つオブジェクト、または辞書から生成

        Raises:
            DecodeError: 座標として解釈できない場合
        """
        try:
            if isinstance(value, dict):
                lat, lng = value["latitude"], value["longitude"]
            else:
                lat, lng = value.latitude, value.longitude
            return cls(latitude=float(lat), longitude=float(lng))
        except (KeyError, AttributeError, TypeError, ValueError, ValidationError) as e:
            raise DecodeError(f"Invalid location value: {value!r} ({e})") from e

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class CoordinateBoundingBox:
    """中心点と半径から求めた緯度経度の矩形範囲（永続化しない）"""

    south_west: GeoCoordinate
    north_east: GeoCoordinate

    def contains(self, point: GeoCoordinate) -> bool:
        """点が矩形の内部にあるか（境界は含まない）"""
        return (
            self.south_west.latitude < point.latitude < self.north_east.latitude
            and self.south_west.longitude < point.longitude < self.north_east.longitude
        )


@dataclass
class Post:
    """
    ユーザーが投稿した店舗レビュー（Firestore保存用）

    1人の投稿者につき1店舗1件。キーは カテゴリ + 店名 + 投稿者UID。
    """

    author_uid: str  # 投稿者UID
    store_name: str  # 店名
    category: PostCategory
    road_address_name: str  # 道路名住所
    location: GeoCoordinate
    content: str = ""  # 本文
    post_image: Optional[str] = None  # 画像のダウンロードURL
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def document_key(self) -> tuple[PostCategory, str, str]:
        """複合キー (カテゴリ, 店名, 投稿者UID)"""
        return (self.category, self.store_name, self.author_uid)

    def to_firestore_dict(self) -> dict[str, Any]:
        """Firestore保存用の辞書に変換"""
        return {
            "authorUID": self.author_uid,
            "storeName": self.store_name,
            "category": self.category.value,
            "roadAddressName": self.road_address_name,
            "location": self.location.to_geo_point(),
            "postImage": self.post_image,
            "content": self.content,
            "createdAt": self.created_at,
        }

    def to_json_dict(self) -> dict[str, Any]:
        """API・CLI出力用の辞書に変換"""
        data = self.to_firestore_dict()
        data["location"] = {
            "latitude": self.location.latitude,
            "longitude": self.location.longitude,
        }
        data["createdAt"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> "Post":
        """
        Firestoreのデータから投稿オブジェクトを生成

        Raises:
            DecodeError: 必須フィールドの欠落や型の不一致
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Document data must be a mapping, got {type(data).__name__}")

        missing = [
            key
            for key in ("authorUID", "storeName", "category", "location")
            if data.get(key) in (None, "")
        ]
        if missing:
            raise DecodeError(f"Missing required fields: {', '.join(missing)}")

        try:
            category = PostCategory.from_value(data["category"])
        except ValidationError as e:
            raise DecodeError(str(e)) from e

        created_at = data.get("createdAt")
        if created_at is not None and not isinstance(created_at, datetime):
            raise DecodeError(f"createdAt must be a timestamp: {created_at!r}")

        return cls(
            author_uid=str(data["authorUID"]),
            store_name=str(data["storeName"]),
            category=category,
            road_address_name=str(data.get("roadAddressName") or ""),
            location=GeoCoordinate.from_value(data["location"]),
            content=str(data.get("content") or ""),
            post_image=data.get("postImage"),
            created_at=created_at or datetime.now(timezone.utc),
        )


@dataclass(frozen=True)
class SkippedDocument:
    """デコードできずに除外されたドキュメント"""

    path: str
    reason: str


@dataclass
class PostBatch:
    """
    クエリ結果の集約（部分的成功）

    デコードに失敗したドキュメントは skipped に理由付きで記録され、
    バッチ全体は失敗しない。posts の順序に意味はない。
    """

    posts: list[Post] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)

    @property
    def decoded_count(self) -> int:
        return len(self.posts)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __len__(self) -> int:
        return len(self.posts)
