"""HTTPサーバー（FastAPI）"""
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .features.app.container import AppContainer
from .features.posts.domain.enums import PostCategory
from .features.posts.domain.models import GeoCoordinate, Post, PostBatch
from .features.posts.services.post_service import PostService
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import (
    ConfigurationError,
    DangleError,
    EventFeedError,
    GeocodingError,
    StorageError,
    ValidationError,
)
from .shared.logging.config import get_logger, setup_logging
from .shared.result import Result

logger = get_logger(__name__)

app = FastAPI(
    title="Dangle Post Service",
    description="位置ベースの店舗レビューと周辺検索のAPI",
    version="1.0.0",
)


@lru_cache
def get_container() -> AppContainer:
    """設定を読み込んでコンテナを生成（プロセスで1回）"""
    settings = Settings()
    setup_logging(
        level=settings.log_level,
        enable_cloud_logging=settings.gcp_logging_enabled,
        project_id=settings.gcp_project_id,
    )
    return AppContainer(settings)


def get_post_service() -> PostService:
    return get_container().post_service


def status_code_for(error: Exception) -> int:
    """ドメインエラーをHTTPステータスに対応付ける"""
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ConfigurationError):
        return 503
    if isinstance(error, (GeocodingError, EventFeedError, StorageError)):
        return 502
    return 500


def unwrap(result: Result[Any]) -> Any:
    if result.is_failure:
        raise HTTPException(status_code=status_code_for(result.error), detail=str(result.error))
    return result.value


def batch_response(batch: PostBatch) -> dict[str, Any]:
    return {
        "count": len(batch.posts),
        "posts": [post.to_json_dict() for post in batch.posts],
        "skipped": [asdict(skipped) for skipped in batch.skipped],
    }


def parse_category(value: str) -> PostCategory:
    try:
        return PostCategory.from_value(value)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("Application starting up")


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.get("/posts/nearby")
async def posts_nearby(
    category: str,
    lat: float,
    lon: float,
    radius_km: float = Query(default=1.0),
    service: PostService = Depends(get_post_service),
) -> dict[str, Any]:
    """地図の中心座標の周辺にある投稿"""
    try:
        center = GeoCoordinate(latitude=lat, longitude=lon)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = await service.fetch_posts_around_coordinate(
        parse_category(category), center, radius_km
    )
    return batch_response(unwrap(result))


@app.get("/posts/store")
async def posts_store(
    store_name: str,
    category: str,
    service: PostService = Depends(get_post_service),
) -> dict[str, Any]:
    """店舗のレビュー一覧"""
    result = await service.fetch_posts_store(store_name, parse_category(category))
    return batch_response(unwrap(result))


@app.get("/places/search")
async def places_search(
    query: str,
    lat: str,
    lon: str,
    radius: int = Query(default=1000),
    service: PostService = Depends(get_post_service),
) -> dict[str, Any]:
    """キーワードで周辺の場所を検索"""
    result = await service.search_location(query, lon, lat, radius)
    return asdict(unwrap(result))


@app.delete("/posts/{category}/{store_name}/{author_uid}")
async def delete_post(
    category: str,
    store_name: str,
    author_uid: str,
    service: PostService = Depends(get_post_service),
) -> dict[str, Any]:
    """投稿を削除（存在しない場合も成功）"""
    parsed = parse_category(category)
    post = Post(
        author_uid=author_uid,
        store_name=store_name,
        category=parsed,
        road_address_name="",
        location=GeoCoordinate(latitude=0.0, longitude=0.0),
    )
    unwrap(await service.delete_post(post, parsed))
    return {"deleted": True}


@app.exception_handler(DangleError)
async def domain_exception_handler(request: Request, exc: DangleError) -> JSONResponse:
    logger.error(f"Unhandled domain error: {exc}")
    return JSONResponse(status_code=status_code_for(exc), content={"detail": str(exc)})


def run(port: Optional[int] = None) -> None:
    import uvicorn

    settings = get_container().settings
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
