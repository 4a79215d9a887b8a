"""カスタム例外定義"""


class DangleError(Exception):
    """Dangleデータアクセス層の基底例外"""

    pass


class HTTPError(DangleError):
    """HTTP関連のエラー"""

    pass


class GeocodingError(DangleError):
    """ジオコーディング・キーワード検索エラー"""

    pass


class StorageError(DangleError):
    """ストレージ（Firestore）関連のエラー"""

    pass


class UploadError(StorageError):
    """画像アップロード（Cloud Storage）のエラー"""

    pass


class ImageEncodingError(DangleError):
    """画像のJPEGエンコードエラー"""

    pass


class DecodeError(DangleError):
    """ドキュメントのデコードエラー"""

    pass


class EventFeedError(DangleError):
    """地域イベントフィード取得エラー"""

    pass


class ConfigurationError(DangleError):
    """設定エラー"""

    pass


class ValidationError(DangleError):
    """バリデーションエラー"""

    pass


class LocationAuthorizationError(DangleError):
    """位置情報の利用が許可されていない"""

    pass
