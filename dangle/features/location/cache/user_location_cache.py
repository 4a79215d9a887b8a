"""ユーザー位置のローカルキャッシュ（JSONファイル）"""
import json
from pathlib import Path
from typing import Any, Optional, Union

from ..domain.models import UserLocationViewModel
from ....shared.exceptions.errors import DecodeError, StorageError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class UserLocationCache:
    """
    キーごとに1つのユーザー位置を保存するキーバリューストア

    プロセスを再起動しても最後の位置を表示できるよう、ファイルに保存する。
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """
        Args:
            path: キャッシュファイルのパス（親ディレクトリは自動作成）
        """
        self.path = Path(path)

    def save(self, key: str, view_model: UserLocationViewModel) -> None:
        """
        位置を保存

        Raises:
            StorageError: ファイルに書き込めない場合
        """
        entries = self._load()
        entries[key] = view_model.to_dict()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(entries, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to write user location cache {self.path}: {e}") from e

        logger.info(f"User location cached under {key}: {view_model.location_name}")

    def get(self, key: str) -> Optional[UserLocationViewModel]:
        """保存された位置を取得（無い、または読めない場合はNone）"""
        data = self._load().get(key)
        if data is None:
            return None

        try:
            return UserLocationViewModel.from_dict(data)
        except DecodeError as e:
            logger.warning(f"Ignoring cached user location {key}: {e}")
            return None

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            entries = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable user location cache {self.path}: {e}")
            return {}

        return entries if isinstance(entries, dict) else {}
