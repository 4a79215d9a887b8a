"""テスト共通のフィクスチャ"""
import io
from typing import Any, Optional

import pytest
from PIL import Image

from dangle.features.posts.domain.enums import PostCategory
from dangle.features.posts.domain.models import GeoCoordinate, Post
from dangle.shared.exceptions.errors import StorageError, UploadError


def _sort_key(value: Any) -> Any:
    """FirestoreのGeoPointは緯度、経度の順で比較される"""
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return (value.latitude, value.longitude)
    return value


class InMemoryFirestoreClient:
    """FirestoreClientと同じインターフェースを持つメモリ上の実装"""

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.fail_writes = False
        self.queries: list[tuple[str, list[tuple[str, str, Any]]]] = []

    def set_document(self, document_path: str, data: dict[str, Any], merge: bool = False) -> None:
        if self.fail_writes:
            raise StorageError(f"Failed to write document {document_path}: unavailable")
        if merge and document_path in self.documents:
            self.documents[document_path].update(data)
        else:
            self.documents[document_path] = dict(data)

    def get_document(self, document_path: str) -> Optional[dict[str, Any]]:
        data = self.documents.get(document_path)
        return dict(data) if data is not None else None

    def delete_document(self, document_path: str) -> None:
        self.documents.pop(document_path, None)

    def query_collection_group(
        self,
        collection_id: str,
        filters: Optional[list[tuple[str, str, Any]]] = None,
        limit: Optional[int] = None,
    ) -> list[tuple[str, dict[str, Any]]]:
        self.queries.append((collection_id, list(filters or [])))
        results = []
        for path, data in self.documents.items():
            segments = path.split("/")
            if len(segments) < 2 or segments[-2] != collection_id:
                continue
            if all(self._matches(data, f) for f in filters or []):
                results.append((path, dict(data)))
        return results[:limit] if limit else results

    @staticmethod
    def _matches(data: dict[str, Any], condition: tuple[str, str, Any]) -> bool:
        field, operator, expected = condition
        if field not in data:
            return False
        actual = data[field]
        try:
            if operator == "==":
                return _sort_key(actual) == _sort_key(expected)
            if operator == ">":
                return _sort_key(actual) > _sort_key(expected)
            if operator == "<":
                return _sort_key(actual) < _sort_key(expected)
        except TypeError:
            return False
        raise ValueError(f"Unsupported operator: {operator}")


class FakeBlobStorage:
    """BlobStorageClientと同じインターフェースを持つメモリ上の実装"""

    def __init__(self, bucket_name: str = "dangle-test.appspot.com") -> None:
        self.bucket_name = bucket_name
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False

    def upload_bytes(self, object_path: str, data: bytes, content_type: str = "") -> str:
        if self.fail_uploads:
            raise UploadError(f"Failed to upload {object_path}: quota exceeded")
        self.objects[object_path] = data
        return f"https://storage.example/{self.bucket_name}/{object_path}"

    def delete(self, object_path: str) -> None:
        self.objects.pop(object_path, None)
        self.deleted.append(object_path)


@pytest.fixture
def firestore_client() -> InMemoryFirestoreClient:
    return InMemoryFirestoreClient()


@pytest.fixture
def blob_storage() -> FakeBlobStorage:
    return FakeBlobStorage()


@pytest.fixture
def seoul() -> GeoCoordinate:
    return GeoCoordinate(latitude=37.5665, longitude=126.9780)


@pytest.fixture
def make_post(seoul: GeoCoordinate):
    """投稿オブジェクトを生成するファクトリ"""

    def _make(
        author_uid: str = "user-1",
        store_name: str = "스타벅스 시청점",
        category: PostCategory = PostCategory.CAFE,
        location: Optional[GeoCoordinate] = None,
        content: str = "조용하고 좋아요",
    ) -> Post:
        return Post(
            author_uid=author_uid,
            store_name=store_name,
            category=category,
            road_address_name="서울 중구 세종대로 110",
            location=location or seoul,
            content=content,
        )

    return _make


@pytest.fixture
def png_bytes() -> bytes:
    """アルファチャンネル付きのPNG画像"""
    buffer = io.BytesIO()
    Image.new("RGBA", (8, 8), (255, 0, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()
