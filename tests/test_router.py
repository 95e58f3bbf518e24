from __future__ import annotations

import asyncio
import json

from adapters.json_config_store import JsonConfigStore
from adapters.summary_formatting import format_summary
from core.commands import GROUP_REFUSAL, CommandProcessor
from core.config import RelayConfig
from core.metadata import MetadataFetcher
from core.resolver import IdentifierResolver
from core.router import EventRouter
from fakes import FakeHttp, FakeSender, FakeStore, card_segment, group_event, private_event, video_body


def _router(config: RelayConfig, http: FakeHttp, store=None) -> tuple[EventRouter, FakeSender]:
    sender = FakeSender()
    router = EventRouter(
        config=config,
        commands=CommandProcessor(config, store or FakeStore()),
        resolver=IdentifierResolver(http),
        fetcher=MetadataFetcher(http),
        formatter=format_summary,
        sender=sender,
    )
    return router, sender


def test_short_link_in_private_chat_is_summarized() -> None:
    http = FakeHttp(location="https://www.bilibili.com/video/BV17x411w7KC", body=video_body())
    router, sender = _router(RelayConfig(), http)

    assert asyncio.run(router.handle(private_event("https://b23.tv/abcd"))) is True

    assert len(sender.sent) == 1
    reply = sender.sent[0]
    assert reply.is_group is False
    assert reply.target_id == 42
    assert "BV17x411w7KC" in reply.text
    assert http.fetched[0][1] == {"bvid": "BV17x411w7KC"}


def test_live_redirect_sends_nothing() -> None:
    http = FakeHttp(location="https://live.bilibili.com/21452505", body=video_body())
    router, sender = _router(RelayConfig(), http)

    assert asyncio.run(router.handle(private_event("https://b23.tv/abcd"))) is False
    assert sender.sent == []
    assert http.fetched == []


def test_card_link_is_normalized_before_resolution() -> None:
    card = json.dumps(
        {"meta": {"detail_1": {"appid": "1109937557", "qqdocurl": "https://b23.tv/Xy1?share_medium=android"}}}
    )
    http = FakeHttp(location="https://www.bilibili.com/video/BV17x411w7KC", body=video_body())
    router, sender = _router(RelayConfig(enabled_groups=["555"]), http)

    asyncio.run(router.handle(group_event("[QQ小程序]哔哩哔哩", segments=[card_segment(card)])))

    assert http.probed == ["https://b23.tv/Xy1"]
    assert sender.sent[0].is_group is True
    assert sender.sent[0].target_id == 555


def test_group_not_in_allow_list_is_ignored() -> None:
    http = FakeHttp(location="https://www.bilibili.com/video/BV17x411w7KC", body=video_body())
    router, sender = _router(RelayConfig(enabled_groups=["556"]), http)

    assert asyncio.run(router.handle(group_event("https://b23.tv/abcd", group_id=555))) is False
    assert sender.sent == []
    assert http.probed == []


def test_allow_listed_group_matches_integer_id() -> None:
    http = FakeHttp(body=video_body())
    router, sender = _router(RelayConfig(enabled_groups=["555"]), http)

    asyncio.run(router.handle(group_event("https://www.bilibili.com/video/BV17x411w7KC?p=1", group_id=555)))

    assert len(sender.sent) == 1
    assert http.probed == []


def test_global_and_private_switches_gate_relay() -> None:
    http = FakeHttp(body=video_body())
    link = "https://www.bilibili.com/video/BV17x411w7KC"

    router, sender = _router(RelayConfig(enabled=False), http)
    asyncio.run(router.handle(private_event(link)))
    assert sender.sent == []

    router, sender = _router(RelayConfig(private_enabled=False), http)
    asyncio.run(router.handle(private_event(link)))
    assert sender.sent == []


def test_failed_metadata_sends_nothing() -> None:
    http = FakeHttp(body={"code": -400, "message": "请求错误"})
    router, sender = _router(RelayConfig(), http)
    asyncio.run(router.handle(private_event("https://www.bilibili.com/video/BV17x411w7KC")))
    assert sender.sent == []


def test_pet_phrase_is_appended() -> None:
    http = FakeHttp(body=video_body())
    router, sender = _router(RelayConfig(pet_phrase="喵~"), http)
    asyncio.run(router.handle(private_event("https://www.bilibili.com/video/BV17x411w7KC")))
    assert sender.sent[0].text.endswith("\n喵~")


def test_commands_skip_link_extraction() -> None:
    http = FakeHttp(body=video_body())
    router, sender = _router(RelayConfig(), http)

    asyncio.run(router.handle(private_event("/bilibilibot help https://b23.tv/abcd")))

    assert len(sender.sent) == 1
    assert sender.sent[0].text.startswith("📜")
    assert http.probed == []


def test_commands_work_while_relay_disabled() -> None:
    config = RelayConfig(enabled=False)
    router, sender = _router(config, FakeHttp())
    asyncio.run(router.handle(private_event("/bilibilibot enable")))
    assert config.enabled is True
    assert sender.sent[0].text == "✅ 已启用视频解析服务"


def test_group_command_gets_refusal() -> None:
    config = RelayConfig()
    router, sender = _router(config, FakeHttp())
    asyncio.run(router.handle(group_event("/bilibilibot disable")))
    assert config.enabled is True
    assert sender.sent[0].text == GROUP_REFUSAL
    assert sender.sent[0].target_id == 555


def test_owner_add_group_is_persisted(tmp_path) -> None:
    path = tmp_path / "config.json"
    store = JsonConfigStore(str(path))
    config = store.load()
    config.owner = "10001"
    router, sender = _router(config, FakeHttp(), store=store)

    asyncio.run(router.handle(private_event("/bilibilibot add_group 555", user_id=10001)))

    assert sender.sent[0].text == "✅ 已添加群 555 到解析列表"
    assert "555" in JsonConfigStore(str(path)).load().enabled_groups
