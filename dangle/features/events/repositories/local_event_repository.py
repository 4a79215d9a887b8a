"""地域イベントリポジトリ（ソウル市オープンデータAPI）"""
from typing import Any, Optional
from urllib.parse import quote

from ..domain.models import (
    CULTURAL_EVENTS,
    EDUCATION_EVENTS,
    NEW_ISSUES,
    EventFeedSpec,
    LocalEvent,
    LocalEventFeed,
)
from ....shared.exceptions.errors import DecodeError, EventFeedError, HTTPError, ValidationError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

SEOUL_OPEN_API_BASE_URL = "http://openapi.seoul.go.kr:8088"

RESULT_OK = "INFO-000"
RESULT_NO_DATA = "INFO-200"


class LocalEventRepository:
    """地域のニュース・文化イベント・教育講座を取得するリポジトリ"""

    def __init__(
        self,
        api_key: str,
        http_client: Optional[HTTPClient] = None,
        base_url: str = SEOUL_OPEN_API_BASE_URL,
        page_size: int = 100,
    ) -> None:
        """
        Args:
            api_key: ソウル市オープンデータAPIキー
            http_client: HTTPクライアント（Noneの場合は新規作成）
            base_url: APIのベースURL
            page_size: 1回に取得する行数
        """
        if not api_key:
            raise ValidationError("Seoul open API key is required")

        self.api_key = api_key
        self.http_client = http_client or HTTPClient()
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        logger.info("LocalEventRepository initialized")

    def fetch_new_issues(self, category: str) -> LocalEventFeed:
        """
        カテゴリ別の市政ニュースを取得

        Args:
            category: ニュースのカテゴリコード（例: "21"）
        """
        if not category:
            raise ValidationError("News category is required")
        return self._fetch(NEW_ISSUES, extra_segments=[category])

    def fetch_cultural_events(self, location: str) -> LocalEventFeed:
        """
        地域（자치구）の文化イベントを取得

        Args:
            location: 자치구名（空の場合は絞り込まない）
        """
        return self._filter_by_district(self._fetch(CULTURAL_EVENTS), location)

    def fetch_education_events(self, location: str) -> LocalEventFeed:
        """地域（자치구）の教育講座を取得"""
        return self._filter_by_district(self._fetch(EDUCATION_EVENTS), location)

    def _fetch(
        self, spec: EventFeedSpec, extra_segments: Optional[list[str]] = None
    ) -> LocalEventFeed:
        """
        フィードを1ページ取得してデコードする

        Raises:
            EventFeedError: 取得失敗またはAPIがエラーを返した場合
        """
        segments = [self.api_key, "json", spec.service, "1", str(self.page_size)]
        segments.extend(extra_segments or [])
        url = f"{self.base_url}/" + "/".join(quote(s, safe="") for s in segments) + "/"

        try:
            payload = self.http_client.get_json(url)
        except HTTPError as e:
            raise EventFeedError(f"Failed to fetch {spec.service}: {e}") from e

        if not isinstance(payload, dict):
            raise EventFeedError(f"{spec.service} response must be a JSON object")

        body = payload.get(spec.service)
        # エラー時はサービス名のキーが無く、RESULTがトップレベルに来る
        result = (body or payload).get("RESULT") or {}
        code = result.get("CODE", RESULT_OK)

        if code == RESULT_NO_DATA:
            logger.info(f"{spec.service}: no data")
            return LocalEventFeed(service=spec.service)
        if code != RESULT_OK or body is None:
            raise EventFeedError(
                f"{spec.service} returned {code}: {result.get('MESSAGE', 'unknown error')}"
            )

        return self._decode(spec, body)

    def _decode(self, spec: EventFeedSpec, body: dict[str, Any]) -> LocalEventFeed:
        rows = body.get("row") or []
        try:
            total_count = int(body.get("list_total_count", len(rows)))
        except (TypeError, ValueError):
            logger.warning(
                f"{spec.service}: invalid list_total_count {body.get('list_total_count')!r}"
            )
            total_count = len(rows)

        feed = LocalEventFeed(service=spec.service, total_count=total_count)
        for row in rows:
            try:
                feed.events.append(LocalEvent.from_row(row, spec))
            except DecodeError as e:
                logger.warning(f"Skipping {spec.service} row: {e}")
                feed.skipped_count += 1

        logger.info(
            f"{spec.service}: {len(feed.events)} events "
            f"({feed.skipped_count} skipped, total={feed.total_count})"
        )
        return feed

    @staticmethod
    def _filter_by_district(feed: LocalEventFeed, location: str) -> LocalEventFeed:
        if location:
            feed.events = [event for event in feed.events if event.district == location]
        return feed
