"""投稿ドメインモデルのテスト"""
from datetime import datetime, timezone

import pytest
from google.cloud.firestore import GeoPoint

from dangle.features.posts.domain.enums import PostCategory
from dangle.features.posts.domain.models import GeoCoordinate, Post
from dangle.shared.exceptions.errors import DecodeError, ValidationError


@pytest.mark.parametrize(
    "value,expected",
    [
        ("카페", PostCategory.CAFE),
        ("cafe", PostCategory.CAFE),
        ("HOSPITAL", PostCategory.HOSPITAL),
        (" 음식점 ", PostCategory.RESTAURANT),
        (PostCategory.HOBBY, PostCategory.HOBBY),
    ],
)
def test_category_from_value(value: str, expected: PostCategory) -> None:
    assert PostCategory.from_value(value) is expected


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(ValidationError):
        PostCategory.from_value("bar")


@pytest.mark.parametrize("latitude,longitude", [(91.0, 0.0), (0.0, -180.5), (float("inf"), 0.0)])
def test_coordinate_range_is_validated(latitude: float, longitude: float) -> None:
    with pytest.raises(ValidationError):
        GeoCoordinate(latitude, longitude)


def test_firestore_dict_uses_review_field_names(make_post) -> None:
    """Firestoreにはアプリと同じフィールド名で保存する"""
    post = make_post()
    data = post.to_firestore_dict()

    assert data["authorUID"] == "user-1"
    assert data["storeName"] == "스타벅스 시청점"
    assert data["category"] == "카페"
    assert data["roadAddressName"] == "서울 중구 세종대로 110"
    assert isinstance(data["location"], GeoPoint)
    assert data["location"].latitude == post.location.latitude
    assert data["postImage"] is None


def test_decode_restores_post(make_post) -> None:
    original = make_post()
    original.post_image = "https://example.com/a.jpg"

    decoded = Post.from_firestore_dict(original.to_firestore_dict())

    assert decoded == original
    assert decoded.document_key == (PostCategory.CAFE, "스타벅스 시청점", "user-1")


def test_decode_accepts_location_mapping() -> None:
    post = Post.from_firestore_dict(
        {
            "authorUID": "u",
            "storeName": "s",
            "category": "병원",
            "location": {"latitude": 37.0, "longitude": 127.0},
            "createdAt": datetime(2023, 9, 1, 12, 0),
        }
    )

    assert post.location == GeoCoordinate(37.0, 127.0)
    assert post.category is PostCategory.HOSPITAL
    assert post.content == ""


@pytest.mark.parametrize(
    "data",
    [
        {"storeName": "s", "category": "카페", "location": GeoPoint(37.0, 127.0)},
        {"authorUID": "u", "storeName": "s", "category": "술집", "location": GeoPoint(37.0, 127.0)},
        {"authorUID": "u", "storeName": "s", "category": "카페", "location": "37,127"},
        {"authorUID": "u", "storeName": "s", "category": "카페", "location": GeoPoint(37.0, 127.0), "createdAt": "yesterday"},
        ["not", "a", "mapping"],
    ],
)
def test_decode_failures_raise_decode_error(data) -> None:
    with pytest.raises(DecodeError):
        Post.from_firestore_dict(data)


def test_json_dict_is_serializable(make_post) -> None:
    data = make_post().to_json_dict()

    assert data["location"] == {"latitude": 37.5665, "longitude": 126.9780}
    assert isinstance(data["createdAt"], str)


def test_created_at_defaults_to_utc(make_post) -> None:
    assert make_post().created_at.tzinfo is timezone.utc
