"""地域イベントリポジトリのテスト"""
from unittest.mock import MagicMock

import pytest

from dangle.features.events.repositories.local_event_repository import LocalEventRepository
from dangle.shared.exceptions.errors import EventFeedError, HTTPError, ValidationError


def cultural_payload(rows):
    return {
        "culturalEventInfo": {
            "list_total_count": 1520,
            "RESULT": {"CODE": "INFO-000", "MESSAGE": "정상 처리되었습니다"},
            "row": rows,
        }
    }


@pytest.fixture
def http_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repository(http_client) -> LocalEventRepository:
    return LocalEventRepository(
        api_key="seoul-key", http_client=http_client, base_url="http://api.example:8088/", page_size=50
    )


def test_cultural_events_are_filtered_by_district(repository, http_client) -> None:
    http_client.get_json.return_value = cultural_payload(
        [
            {"TITLE": "서울재즈페스티벌", "GUNAME": "송파구", "PLACE": "올림픽공원", "DATE": "2023-05-26~2023-05-28", "CODENAME": "콘서트", "ORG_LINK": "https://example.com/jazz", "MAIN_IMG": ""},
            {"TITLE": "강남 페스티벌", "GUNAME": "강남구", "PLACE": "코엑스"},
            {"TITLE": "", "GUNAME": "송파구"},
            "garbage",
        ]
    )

    feed = repository.fetch_cultural_events("송파구")

    http_client.get_json.assert_called_once_with(
        "http://api.example:8088/seoul-key/json/culturalEventInfo/1/50/"
    )
    assert feed.total_count == 1520
    assert feed.skipped_count == 2
    assert [e.title for e in feed.events] == ["서울재즈페스티벌"]
    event = feed.events[0]
    assert event.place == "올림픽공원"
    assert event.url == "https://example.com/jazz"
    assert event.image_url is None


def test_empty_location_keeps_all_events(repository, http_client) -> None:
    http_client.get_json.return_value = cultural_payload(
        [{"TITLE": "a", "GUNAME": "중구"}, {"TITLE": "b", "GUNAME": "종로구"}]
    )

    assert len(repository.fetch_cultural_events("").events) == 2


def test_education_events_use_reservation_fields(repository, http_client) -> None:
    http_client.get_json.return_value = {
        "ListPublicReservationEducation": {
            "list_total_count": 1,
            "RESULT": {"CODE": "INFO-000"},
            "row": [{"SVCNM": "코딩 교실", "AREANM": "마포구", "PLACENM": "마포중앙도서관", "SVCURL": "https://yeyak.seoul.go.kr/1"}],
        }
    }

    feed = repository.fetch_education_events("마포구")

    assert feed.events[0].title == "코딩 교실"
    assert feed.events[0].url == "https://yeyak.seoul.go.kr/1"


def test_new_issues_pass_category_segment(repository, http_client) -> None:
    http_client.get_json.return_value = {
        "SeoulNewsList": {"list_total_count": 0, "RESULT": {"CODE": "INFO-000"}, "row": []}
    }

    feed = repository.fetch_new_issues("21")

    assert feed.events == []
    http_client.get_json.assert_called_once_with(
        "http://api.example:8088/seoul-key/json/SeoulNewsList/1/50/21/"
    )


def test_no_data_result_is_empty_feed(repository, http_client) -> None:
    http_client.get_json.return_value = {
        "RESULT": {"CODE": "INFO-200", "MESSAGE": "해당하는 데이터가 없습니다."}
    }

    feed = repository.fetch_cultural_events("강남구")

    assert feed.events == [] and feed.total_count == 0


def test_api_error_result_raises(repository, http_client) -> None:
    http_client.get_json.return_value = {
        "RESULT": {"CODE": "INFO-100", "MESSAGE": "인증키가 유효하지 않습니다."}
    }

    with pytest.raises(EventFeedError, match="INFO-100"):
        repository.fetch_cultural_events("강남구")


def test_http_failure_raises(repository, http_client) -> None:
    http_client.get_json.side_effect = HTTPError("timeout")

    with pytest.raises(EventFeedError):
        repository.fetch_education_events("강남구")


def test_requires_api_key() -> None:
    with pytest.raises(ValidationError):
        LocalEventRepository(api_key="")


def test_invalid_total_count_falls_back_to_row_count(repository, http_client) -> None:
    payload = cultural_payload([{"TITLE": "국악 한마당", "GUNAME": "종로구"}])
    payload["culturalEventInfo"]["list_total_count"] = "N/A"
    http_client.get_json.return_value = payload

    feed = repository.fetch_cultural_events("")

    assert feed.total_count == 1
    assert [event.title for event in feed.events] == ["국악 한마당"]
