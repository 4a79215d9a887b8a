"""CLIのテスト"""
from unittest.mock import MagicMock, patch

import pytest

from dangle import entrypoint
from dangle.features.events.domain.models import LocalEvent, LocalEventFeed
from dangle.features.posts.domain.enums import PostCategory
from dangle.features.posts.domain.models import PostBatch, SkippedDocument
from dangle.shared.exceptions.errors import StorageError


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        entrypoint.build_parser().parse_args([])


def test_nearby_command(make_post) -> None:
    container = MagicMock()
    container.post_repository.fetch_posts_around_coordinate.return_value = PostBatch(
        posts=[make_post()], skipped=[SkippedDocument(path="카페/x/UserReviews/y", reason="bad")]
    )
    args = entrypoint.build_parser().parse_args(
        ["nearby", "--category", "cafe", "--lat", "37.5665", "--lon", "126.978", "--radius", "2"]
    )

    output = entrypoint.run_command(args, container)

    category, center, radius = container.post_repository.fetch_posts_around_coordinate.call_args.args
    assert category is PostCategory.CAFE
    assert center.to_tuple() == (37.5665, 126.978)
    assert radius == 2.0
    assert output["posts"][0]["authorUID"] == "user-1"
    assert output["skipped"] == [{"path": "카페/x/UserReviews/y", "reason": "bad"}]


def test_delete_command_uses_composite_key() -> None:
    container = MagicMock()
    args = entrypoint.build_parser().parse_args(
        ["delete", "--category", "병원", "--store", "서울내과", "--author", "uid-9"]
    )

    assert entrypoint.run_command(args, container) == {"deleted": True}
    post, category = container.post_repository.delete_post.call_args.args
    assert post.document_key == (PostCategory.HOSPITAL, "서울내과", "uid-9")
    assert category is PostCategory.HOSPITAL


def test_main_returns_failure_exit_code(monkeypatch, capsys) -> None:
    monkeypatch.setenv("GCP_PROJECT_ID", "dangle-test")
    monkeypatch.setenv("STORAGE_BUCKET_NAME", "dangle-test.appspot.com")
    container = MagicMock()
    container.post_repository.fetch_posts_store.side_effect = StorageError("unavailable")

    with patch.object(entrypoint, "AppContainer", return_value=container), patch.object(
        entrypoint, "setup_logging"
    ):
        code = entrypoint.main(["--env-file", "/nonexistent.env", "store", "--name", "s", "--category", "cafe"])

    assert code == 1
    container.close.assert_called_once_with()


def test_main_prints_json(monkeypatch, capsys) -> None:
    monkeypatch.setenv("GCP_PROJECT_ID", "dangle-test")
    monkeypatch.setenv("STORAGE_BUCKET_NAME", "dangle-test.appspot.com")
    container = MagicMock()
    container.post_repository.fetch_posts_store.return_value = PostBatch()

    with patch.object(entrypoint, "AppContainer", return_value=container), patch.object(
        entrypoint, "setup_logging"
    ):
        code = entrypoint.main(["store", "--name", "s", "--category", "cafe"])

    assert code == 0
    assert '"posts": []' in capsys.readouterr().out


def test_events_command_dispatches_by_kind() -> None:
    container = MagicMock()
    container.local_event_repository.fetch_cultural_events.return_value = LocalEventFeed(
        service="culturalEventInfo",
        total_count=1,
        events=[LocalEvent(title="재즈 페스티벌", district="강남구")],
    )
    args = entrypoint.build_parser().parse_args(["events", "cultural", "강남구"])

    output = entrypoint.run_command(args, container)

    container.local_event_repository.fetch_cultural_events.assert_called_once_with("강남구")
    assert output["events"][0]["title"] == "재즈 페스티벌"
    assert output["total_count"] == 1


def test_main_applies_log_level_option(monkeypatch) -> None:
    """--log-level は唯一のロギング設定呼び出しに反映される"""
    monkeypatch.setenv("GCP_PROJECT_ID", "dangle-test")
    monkeypatch.setenv("STORAGE_BUCKET_NAME", "dangle-test.appspot.com")
    container = MagicMock()
    container.post_repository.fetch_posts_store.return_value = PostBatch()

    with patch.object(entrypoint, "AppContainer", return_value=container), patch.object(
        entrypoint, "setup_logging"
    ) as setup_logging:
        entrypoint.main(["--log-level", "DEBUG", "store", "--name", "s", "--category", "cafe"])

    setup_logging.assert_called_once()
    assert setup_logging.call_args.kwargs["level"] == "DEBUG"
