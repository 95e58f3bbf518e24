"""Shared summary formatting helpers.

The output is a OneBot CQ-coded message, so it lives on the adapter side.
Formatting is pure: identical metadata always renders the same bytes.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from adapters.categories import zone_name
from core.models import ContentMetadata

VIDEO_URL = "https://www.bilibili.com/video/{bvid}"
CENT = Decimal("0.01")


def _scaled(value: int, unit: int) -> Decimal:
    # Ties round half-up on the exact quotient.
    return (Decimal(value) / Decimal(unit)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_count(value: int) -> str:
    """Render a statistic with 亿/万 scaling and two decimals."""

    if value >= 100_000_000:
        return f"{_scaled(value, 100_000_000)}亿"
    if value >= 10_000:
        return f"{_scaled(value, 10_000)}万"
    return str(value)


def format_summary(metadata: ContentMetadata) -> str:
    """Return the reply text for one video."""

    stats = metadata.stats
    lines = [
        f"[CQ:image,file={metadata.pic}]",
        f"📺 {metadata.title}",
        f"📑 BV号: {metadata.bvid}",
        f"👤 UP主: {metadata.owner_name}",
        f"🏷️ 分区: {zone_name(metadata.tid)}",
        f"📈 播放: {format_count(stats.view)} | 💬 弹幕: {format_count(stats.danmaku)}",
        f"📝 评论: {format_count(stats.reply)} | ⭐ 收藏: {format_count(stats.favorite)}",
        f"🪙 投币: {format_count(stats.coin)} | 🔄 分享: {format_count(stats.share)}"
        f" | 👍 点赞: {format_count(stats.like)}",
        f"🔗 链接: {VIDEO_URL.format(bvid=metadata.bvid)}",
    ]
    return "\n".join(lines)
