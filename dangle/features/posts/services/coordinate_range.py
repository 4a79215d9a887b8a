"""中心座標と半径から緯度経度の検索範囲を求める"""
import math

from ....shared.exceptions.errors import ValidationError
from ..domain.models import CoordinateBoundingBox, GeoCoordinate

# 緯度1度あたりの距離（km）
KM_PER_DEGREE_LATITUDE = 110.574
# 赤道上の経度1度あたりの距離（km）。緯度に応じてcosで縮む
KM_PER_DEGREE_LONGITUDE_AT_EQUATOR = 111.32

DEFAULT_MAX_LATITUDE = 85.0


def calculate_bounding_box(
    center: GeoCoordinate,
    radius_km: float,
    max_latitude: float = DEFAULT_MAX_LATITUDE,
) -> CoordinateBoundingBox:
    """
    中心点と半径（km）から検索用の矩形範囲を計算する

    Args:
        center: 中心座標
        radius_km: 半径（km、0より大きい）
        max_latitude: 許容する中心緯度の絶対値の上限

    Returns:
        CoordinateBoundingBox: 南西・北東の2点

    Raises:
        ValidationError: 半径が0以下、または中心が極に近すぎる場合

    Example:
        >>> box = calculate_bounding_box(GeoCoordinate(37.5665, 126.9780), 1.0)
        >>> round(box.south_west.latitude, 4), round(box.north_east.longitude, 4)
        (37.5575, 126.9893)
    """
    if not math.isfinite(radius_km) or radius_km <= 0:
        raise ValidationError(f"Radius must be a positive number of kilometers: {radius_km}")

    # 極付近では経度方向のオフセットが発散するため拒否する
    if abs(center.latitude) > max_latitude:
        raise ValidationError(
            f"Center latitude {center.latitude} is beyond the supported bound of ±{max_latitude}"
        )

    lat_offset = radius_km / KM_PER_DEGREE_LATITUDE
    lon_offset = radius_km / (
        KM_PER_DEGREE_LONGITUDE_AT_EQUATOR * math.cos(math.radians(center.latitude))
    )

    # 値域を超えないよう緯度は±90、経度は±180でクランプする
    south_west = GeoCoordinate(
        latitude=max(center.latitude - lat_offset, -90.0),
        longitude=max(center.longitude - lon_offset, -180.0),
    )
    north_east = GeoCoordinate(
        latitude=min(center.latitude + lat_offset, 90.0),
        longitude=min(center.longitude + lon_offset, 180.0),
    )

    return CoordinateBoundingBox(south_west=south_west, north_east=north_east)
