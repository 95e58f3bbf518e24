from __future__ import annotations

import pytest

from adapters.categories import zone_name
from adapters.summary_formatting import format_count, format_summary
from core.metadata import parse_metadata
from fakes import video_body


def test_zone_name_lookup() -> None:
    assert zone_name(1) == "动画"
    assert zone_name(231) == "计算机技术"
    assert zone_name(999) == "未知分区"


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (9999, "9999"),
        (10000, "1.00万"),
        (123456, "12.35万"),
        (99999999, "10000.00万"),
        (100000000, "1.00亿"),
        (250000000, "2.50亿"),
        (11250, "1.13万"),
        (16250, "1.63万"),
        (112500000, "1.13亿"),
    ],
)
def test_format_count(value: int, expected: str) -> None:
    assert format_count(value) == expected


def test_format_summary_golden() -> None:
    metadata = parse_metadata(video_body()["data"])
    expected = (
        "[CQ:image,file=http://i0.hdslb.com/bfs/archive/cover.jpg]\n"
        "📺 测试视频\n"
        "📑 BV号: BV17x411w7KC\n"
        "👤 UP主: 测试UP\n"
        "🏷️ 分区: 动画\n"
        "📈 播放: 1.00万 | 💬 弹幕: 100\n"
        "📝 评论: 50 | ⭐ 收藏: 200\n"
        "🪙 投币: 300 | 🔄 分享: 10 | 👍 点赞: 500\n"
        "🔗 链接: https://www.bilibili.com/video/BV17x411w7KC"
    )
    assert format_summary(metadata) == expected
    assert format_summary(metadata) == format_summary(parse_metadata(video_body()["data"]))


def test_format_summary_unknown_zone() -> None:
    metadata = parse_metadata(video_body(tid=4242)["data"])
    assert "🏷️ 分区: 未知分区" in format_summary(metadata)
