from __future__ import annotations

import json

from core.extractor import MINIPROGRAM, TEXT_SHARE, extract_reference
from fakes import card_segment, group_event, private_event


def _card(appid: str = "1109937557", url: str = "https://b23.tv/Card123?share_source=qq") -> str:
    return json.dumps({"meta": {"detail_1": {"appid": appid, "qqdocurl": url}}})


def test_miniprogram_card_wins_over_text_links() -> None:
    event = group_event("see https://b23.tv/abcd", segments=[card_segment(_card())])
    reference = extract_reference(event)
    assert reference is not None
    assert reference.url == "https://b23.tv/Card123?share_source=qq"
    assert reference.provenance == MINIPROGRAM
    assert reference.needs_normalization is True


def test_card_from_other_app_falls_through_to_text() -> None:
    event = group_event("https://b23.tv/abcd", segments=[card_segment(_card(appid="100951776"))])
    reference = extract_reference(event)
    assert reference is not None
    assert reference.url == "https://b23.tv/abcd"


def test_deeply_nested_card_falls_through_to_text() -> None:
    event = group_event("https://b23.tv/abcd", segments=[card_segment("[" * 100_000)])
    reference = extract_reference(event)
    assert reference is not None
    assert reference.url == "https://b23.tv/abcd"
    assert reference.provenance == TEXT_SHARE


def test_malformed_card_json_falls_through_to_text() -> None:
    event = group_event("https://b23.tv/abcd", segments=[card_segment("{not json")])
    reference = extract_reference(event)
    assert reference is not None
    assert reference.url == "https://b23.tv/abcd"


def test_card_with_unexpected_shape_is_ignored() -> None:
    payload = json.dumps({"meta": ["detail_1"]})
    event = private_event("nothing here", segments=[card_segment(payload)])
    assert extract_reference(event) is None


def test_card_with_empty_url_is_ignored() -> None:
    event = private_event("nothing here", segments=[card_segment(_card(url=""))])
    assert extract_reference(event) is None


def test_short_link_does_not_need_normalization() -> None:
    reference = extract_reference(private_event("【标题】 https://b23.tv/xYz12 快来看"))
    assert reference is not None
    assert reference.url == "https://b23.tv/xYz12"
    assert reference.needs_normalization is False


def test_short_link_preferred_over_video_link() -> None:
    text = "https://www.bilibili.com/video/BV1aa411c7xx https://b23.tv/short1"
    reference = extract_reference(private_event(text))
    assert reference is not None
    assert reference.url == "https://b23.tv/short1"


def test_video_link_keeps_trailing_query_for_normalization() -> None:
    text = "look https://www.bilibili.com/video/BV17x411w7KC?p=2&spm_id_from=333 ok"
    reference = extract_reference(private_event(text))
    assert reference is not None
    assert reference.url == "https://www.bilibili.com/video/BV17x411w7KC?p=2&spm_id_from=333"
    assert reference.needs_normalization is True


def test_av_video_link_is_recognized() -> None:
    reference = extract_reference(private_event("http://bilibili.com/video/av170001"))
    assert reference is not None
    assert reference.url == "http://bilibili.com/video/av170001"


def test_only_first_link_is_taken() -> None:
    text = "https://b23.tv/first https://b23.tv/second"
    reference = extract_reference(private_event(text))
    assert reference is not None
    assert reference.url == "https://b23.tv/first"


def test_no_reference() -> None:
    assert extract_reference(private_event("https://example.com/video/BV17x411w7KC")) is None
