"""CLIエントリーポイント"""
import argparse
import json
import sys
from dataclasses import asdict
from typing import Any

from .features.app.container import AppContainer
from .features.posts.domain.enums import PostCategory
from .features.posts.domain.models import GeoCoordinate, Post
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import DangleError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dangle", description="Dangle 投稿・位置情報データアクセスツール"
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    nearby = subparsers.add_parser("nearby", help="中心座標の周辺の投稿を取得")
    nearby.add_argument("--category", required=True, help="カテゴリ（例: cafe, 카페）")
    nearby.add_argument("--lat", type=float, required=True, help="中心の緯度")
    nearby.add_argument("--lon", type=float, required=True, help="中心の経度")
    nearby.add_argument("--radius", type=float, default=1.0, help="半径（km）")

    store = subparsers.add_parser("store", help="店舗のレビューを取得")
    store.add_argument("--name", required=True, help="店名")
    store.add_argument("--category", required=True, help="カテゴリ")

    search = subparsers.add_parser("search", help="キーワードで場所を検索")
    search.add_argument("query", help="検索キーワード")
    search.add_argument("--lat", type=str, required=True, help="中心の緯度")
    search.add_argument("--lon", type=str, required=True, help="中心の経度")
    search.add_argument("--radius", type=int, default=1000, help="半径（m）")

    regions = subparsers.add_parser("regions", help="行政区域コードを検索")
    regions.add_argument("pattern", help="区域コードのパターン（例: 11*000000）")

    events = subparsers.add_parser("events", help="地域のニュース・イベントを取得")
    events.add_argument("kind", choices=["news", "cultural", "education"], help="フィードの種類")
    events.add_argument("value", help="news: カテゴリ、cultural/education: 자치구名")

    delete = subparsers.add_parser("delete", help="投稿を削除")
    delete.add_argument("--category", required=True, help="カテゴリ")
    delete.add_argument("--store", required=True, help="店名")
    delete.add_argument("--author", required=True, help="投稿者UID")

    return parser


def run_command(args: argparse.Namespace, container: AppContainer) -> Any:
    """サブコマンドを実行し、出力用のデータを返す"""
    repository = container.post_repository

    if args.command == "nearby":
        batch = repository.fetch_posts_around_coordinate(
            PostCategory.from_value(args.category),
            GeoCoordinate(latitude=args.lat, longitude=args.lon),
            args.radius,
        )
        return {
            "posts": [post.to_json_dict() for post in batch.posts],
            "skipped": [asdict(skipped) for skipped in batch.skipped],
        }

    if args.command == "store":
        batch = repository.fetch_posts_store(args.name, PostCategory.from_value(args.category))
        return {
            "posts": [post.to_json_dict() for post in batch.posts],
            "skipped": [asdict(skipped) for skipped in batch.skipped],
        }

    if args.command == "search":
        result = repository.search_location(args.query, args.lon, args.lat, args.radius)
        return asdict(result)

    if args.command == "regions":
        return asdict(container.region_codes.fetch_region_codes(args.pattern))

    if args.command == "events":
        events = container.local_event_repository
        fetchers = {
            "news": events.fetch_new_issues,
            "cultural": events.fetch_cultural_events,
            "education": events.fetch_education_events,
        }
        return asdict(fetchers[args.kind](args.value))

    if args.command == "delete":
        category = PostCategory.from_value(args.category)
        # 削除は複合キーのみで決まるので、その他の項目はダミーで良い
        post = Post(
            author_uid=args.author,
            store_name=args.store,
            category=category,
            road_address_name="",
            location=GeoCoordinate(latitude=0.0, longitude=0.0),
        )
        repository.delete_post(post, category)
        return {"deleted": True}

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Any = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗）
    """
    args = build_parser().parse_args(argv)

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(
            level=settings.log_level,
            enable_cloud_logging=settings.gcp_logging_enabled,
            project_id=settings.gcp_project_id,
        )
        logger.info(f"Running command: {args.command} (environment={settings.environment})")

        container = AppContainer(settings)
        try:
            output = run_command(args, container)
        finally:
            container.close()

        print(json.dumps(output, ensure_ascii=False, indent=2, default=str))
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except DangleError as e:
        logger.error(f"Command failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
