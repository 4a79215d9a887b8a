"""HTTPサーバーのテスト"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from dangle.features.geocoding.providers.kakao_local_client import KakaoLocalClient
from dangle.features.posts.services.post_service import PostService
from dangle.features.storage.repositories.post_repository import PostRepository
from dangle.server import app, get_post_service
from dangle.shared.exceptions.errors import HTTPError


@pytest.fixture
def keyword_http() -> MagicMock:
    return MagicMock()


@pytest.fixture
def api(firestore_client, blob_storage, keyword_http):
    repository = PostRepository(
        firestore_client,
        blob_storage,
        keyword_search=KakaoLocalClient("rest-key", http_client=keyword_http),
    )
    app.dependency_overrides[get_post_service] = lambda: PostService(repository)
    yield TestClient(app), repository
    app.dependency_overrides.clear()


def test_health(api) -> None:
    client, _ = api
    assert client.get("/health").json() == {"status": "healthy"}


def test_nearby_posts(api, make_post) -> None:
    client, repository = api
    post = make_post()
    repository.update_post(post, post.category)

    response = client.get(
        "/posts/nearby", params={"category": "cafe", "lat": 37.5665, "lon": 126.978, "radius_km": 1}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["posts"][0]["storeName"] == "스타벅스 시청점"
    assert body["skipped"] == []


@pytest.mark.parametrize(
    "params",
    [
        {"category": "cafe", "lat": 37.5, "lon": 127.0, "radius_km": 0},
        {"category": "bar", "lat": 37.5, "lon": 127.0},
        {"category": "cafe", "lat": 95.0, "lon": 127.0},
    ],
)
def test_nearby_invalid_input_is_bad_request(api, params) -> None:
    client, _ = api
    assert client.get("/posts/nearby", params=params).status_code == 400


def test_store_posts(api, make_post) -> None:
    client, repository = api
    for uid in ("a", "b"):
        post = make_post(author_uid=uid)
        repository.update_post(post, post.category)

    response = client.get("/posts/store", params={"store_name": "스타벅스 시청점", "category": "카페"})

    assert response.json()["count"] == 2


def test_search_places_upstream_failure(api, keyword_http) -> None:
    client, _ = api
    keyword_http.get_json.side_effect = HTTPError("503")

    response = client.get("/places/search", params={"query": "카페", "lat": "37.5", "lon": "127.0"})

    assert response.status_code == 502


def test_delete_post(api, firestore_client, make_post) -> None:
    client, repository = api
    post = make_post()
    repository.update_post(post, post.category)

    response = client.delete("/posts/cafe/스타벅스 시청점/user-1")

    assert response.json() == {"deleted": True}
    assert firestore_client.documents == {}
