"""Kakao Local API（キーワードで場所を検索）"""
from typing import Optional

from ..domain.models import KeywordSearchResult
from ....shared.exceptions.errors import GeocodingError, HTTPError, ValidationError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

KEYWORD_SEARCH_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"
MAX_RADIUS_METERS = 20000


class KakaoLocalClient:
    """Kakaoキーワード検索クライアント"""

    def __init__(
        self,
        rest_api_key: str,
        http_client: Optional[HTTPClient] = None,
        keyword_search_url: str = KEYWORD_SEARCH_URL,
    ) -> None:
        """
        Args:
            rest_api_key: Kakao REST APIキー
            http_client: HTTPクライアント（Noneの場合は新規作成）
            keyword_search_url: キーワード検索APIのURL
        """
        if not rest_api_key:
            raise ValidationError("Kakao REST API key is required")

        self.rest_api_key = rest_api_key
        self.http_client = http_client or HTTPClient()
        self.keyword_search_url = keyword_search_url

        logger.info("KakaoLocalClient initialized")

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"KakaoAK {self.rest_api_key}"}

    def search_keyword(
        self, query: str, longitude: str, latitude: str, radius: int
    ) -> KeywordSearchResult:
        """
        中心座標の周辺をキーワードで検索

        Args:
            query: 検索キーワード
            longitude: 中心の経度（x）
            latitude: 中心の緯度（y）
            radius: 検索半径（m、0〜20000）

        Returns:
            KeywordSearchResult: 検索結果

        Raises:
            ValidationError: 引数が不正な場合
            GeocodingError: API呼び出しまたはレスポンスの解釈に失敗した場合
        """
        if not query or not query.strip():
            raise ValidationError("Search query is required")
        if not 0 <= radius <= MAX_RADIUS_METERS:
            raise ValidationError(
                f"Radius must be between 0 and {MAX_RADIUS_METERS} meters: {radius}"
            )

        params = {
            "query": query,
            "x": str(longitude),
            "y": str(latitude),
            "radius": str(radius),
        }

        try:
            payload = self.http_client.get_json(
                self.keyword_search_url, params=params, headers=self.auth_headers
            )
        except HTTPError as e:
            logger.error(f"Keyword search failed for '{query}': {e}")
            raise GeocodingError(f"Keyword search failed for '{query}': {e}") from e

        if not isinstance(payload, dict):
            raise GeocodingError("Keyword search response must be a JSON object")

        result = KeywordSearchResult.from_dict(payload)
        logger.info(
            f"Keyword search '{query}' around ({latitude}, {longitude}): "
            f"{len(result.documents)} places"
        )
        return result
