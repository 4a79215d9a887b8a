"""投稿検索用のFirestoreフィルタとドキュメントパスを組み立てる"""
from typing import Any

from ....shared.exceptions.errors import ValidationError
from ..domain.enums import PostCategory
from ..domain.models import CoordinateBoundingBox

# レビューを格納するサブコレクション（コレクショングループID）
REVIEWS_SUBCOLLECTION = "UserReviews"

Filter = tuple[str, str, Any]


def build_area_filters(
    category: PostCategory, box: CoordinateBoundingBox
) -> list[Filter]:
    """
    カテゴリ一致 + 位置の範囲条件（両端を含まない）

    Example:
        >>> build_area_filters(PostCategory.CAFE, box)
        [("category", "==", "카페"), ("location", ">", <GeoPoint>), ("location", "<", <GeoPoint>)]
    """
    return [
        ("category", "==", category.value),
        ("location", ">", box.south_west.to_geo_point()),
        ("location", "<", box.north_east.to_geo_point()),
    ]


def build_store_filters(category: PostCategory, store_name: str) -> list[Filter]:
    """カテゴリ一致 + 店名の完全一致"""
    _validate_segment("store_name", store_name)
    return [
        ("category", "==", category.value),
        ("storeName", "==", store_name),
    ]


def collection_path(category: PostCategory, store_name: str) -> str:
    """店舗のレビューサブコレクションのパス"""
    _validate_segment("store_name", store_name)
    return f"{category.value}/{store_name}/{REVIEWS_SUBCOLLECTION}"


def document_path(category: PostCategory, store_name: str, author_uid: str) -> str:
    """
    複合キーからレビュードキュメントのパスを組み立てる

    Returns:
        str: "<カテゴリ>/<店名>/UserReviews/<投稿者UID>"
    """
    _validate_segment("author_uid", author_uid)
    return f"{collection_path(category, store_name)}/{author_uid}"


def _validate_segment(name: str, value: str) -> None:
    """パスの1セグメントとして使える値か確認する"""
    if not value or not value.strip():
        raise ValidationError(f"{name} is required")
    if "/" in value:
        raise ValidationError(f"{name} must not contain '/': {value}")
    if value in (".", ".."):
        raise ValidationError(f"{name} must not be '.' or '..'")
