"""投稿操作の非同期ファサード"""
import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from ..domain.enums import PostCategory
from ..domain.models import GeoCoordinate, Post, PostBatch
from .image_encoder import ImageInput
from ...geocoding.domain.models import KeywordSearchResult
from ...storage.repositories.post_repository import PostRepository
from ....shared.exceptions.errors import DangleError
from ....shared.logging.config import get_logger
from ....shared.result import Result

logger = get_logger(__name__)

T = TypeVar("T")


class PostService:
    """
    PostRepository の各操作を、ワーカースレッドで実行して Result を1つだけ返す

    ドメインエラーは例外として送出せず Result.failure に包む。
    キャンセルやリトライは行わない。
    """

    def __init__(self, repository: PostRepository) -> None:
        self.repository = repository

    async def add_post(self, post: Post, image: ImageInput) -> Result[Post]:
        return await self._run("add_post", self.repository.add_post, post, image)

    async def update_post(self, post: Post, category: PostCategory) -> Result[None]:
        return await self._run("update_post", self.repository.update_post, post, category)

    async def delete_post(self, post: Post, category: PostCategory) -> Result[None]:
        return await self._run("delete_post", self.repository.delete_post, post, category)

    async def fetch_posts_around_coordinate(
        self, category: PostCategory, center: GeoCoordinate, radius_km: float
    ) -> Result[PostBatch]:
        return await self._run(
            "fetch_posts_around_coordinate",
            self.repository.fetch_posts_around_coordinate,
            category,
            center,
            radius_km,
        )

    async def fetch_posts_store(
        self, store_name: str, category: PostCategory
    ) -> Result[PostBatch]:
        return await self._run(
            "fetch_posts_store", self.repository.fetch_posts_store, store_name, category
        )

    async def search_location(
        self, query: str, longitude: str, latitude: str, radius: int
    ) -> Result[KeywordSearchResult]:
        return await self._run(
            "search_location",
            self.repository.search_location,
            query,
            longitude,
            latitude,
            radius,
        )

    async def _run(self, name: str, func: Callable[..., T], *args: Any) -> Result[T]:
        try:
            value = await asyncio.to_thread(func, *args)
        except DangleError as e:
            logger.warning(f"{name} failed: {e}")
            return Result.failure(e)
        return Result.success(value)
