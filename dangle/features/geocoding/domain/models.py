"""キーワード検索・行政区域コードのレスポンスモデル"""
from dataclasses import dataclass, field
from typing import Any, Optional

from ....shared.exceptions.errors import GeocodingError


@dataclass
class Place:
    """キーワード検索でヒットした場所"""

    id: str
    place_name: str
    x: float  # 経度
    y: float  # 緯度
    address_name: str = ""
    road_address_name: str = ""
    category_name: str = ""
    category_group_code: str = ""
    category_group_name: str = ""
    phone: str = ""
    place_url: str = ""
    distance: Optional[int] = None  # 中心座標からの距離（m）。中心未指定時はNone

    @property
    def latitude(self) -> float:
        return self.y

    @property
    def longitude(self) -> float:
        return self.x

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Place":
        distance = data.get("distance")
        return cls(
            id=str(data["id"]),
            place_name=data["place_name"],
            x=float(data["x"]),
            y=float(data["y"]),
            address_name=data.get("address_name", ""),
            road_address_name=data.get("road_address_name", ""),
            category_name=data.get("category_name", ""),
            category_group_code=data.get("category_group_code", ""),
            category_group_name=data.get("category_group_name", ""),
            phone=data.get("phone", ""),
            place_url=data.get("place_url", ""),
            distance=int(distance) if distance not in (None, "") else None,
        )


@dataclass
class SameName:
    """質問文から推定された地域情報"""

    region: list[str] = field(default_factory=list)
    keyword: str = ""
    selected_region: str = ""


@dataclass
class SearchMeta:
    total_count: int = 0
    pageable_count: int = 0
    is_end: bool = True
    same_name: Optional[SameName] = None


@dataclass
class KeywordSearchResult:
    """Kakaoキーワード検索のレスポンス（読み取り専用）"""

    meta: SearchMeta
    documents: list[Place] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeywordSearchResult":
        """
        APIレスポンスのJSONから生成

        Raises:
            GeocodingError: スキーマに合わない場合
        """
        try:
            meta_data = data.get("meta") or {}
            same_name_data = meta_data.get("same_name")
            same_name = (
                SameName(
                    region=list(same_name_data.get("region", [])),
                    keyword=same_name_data.get("keyword", ""),
                    selected_region=same_name_data.get("selected_region", ""),
                )
                if same_name_data
                else None
            )
            meta = SearchMeta(
                total_count=int(meta_data.get("total_count", 0)),
                pageable_count=int(meta_data.get("pageable_count", 0)),
                is_end=bool(meta_data.get("is_end", True)),
                same_name=same_name,
            )
            documents = [Place.from_dict(doc) for doc in data.get("documents", [])]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Unexpected keyword search response: {e}") from e

        return cls(meta=meta, documents=documents)


@dataclass
class Regcode:
    """行政区域コード"""

    code: str
    name: str


@dataclass
class RegionCodeResponse:
    regcodes: list[Regcode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegionCodeResponse":
        try:
            return cls(
                regcodes=[
                    Regcode(code=str(item["code"]), name=item["name"])
                    for item in data["regcodes"]
                ]
            )
        except (KeyError, TypeError) as e:
            raise GeocodingError(f"Unexpected region code response: {e}") from e
