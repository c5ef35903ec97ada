"""RSS 2.0 feed of finalized diary entries."""

from pydantic import BaseModel

from public_diary.clock import format_feed_timestamp
from public_diary.feed.escaping import escape_xml
from public_diary.models.entry import DiaryEntry
from public_diary.models.preview import make_preview

FEED_TITLE = "誰かが書く日記"
FEED_DESCRIPTION = "自分が書かなければおそらく誰かが書く日記"
FEED_LANGUAGE = "ja"
FEED_DESCRIPTION_LENGTH = 200
FEED_ITEM_LIMIT = 20


class FeedItem(BaseModel):
    """One feed item, unescaped."""

    title: str
    link: str
    guid: str
    pub_date: str
    description: str


def entry_link(base_url: str, date_key: str) -> str:
    """Permalink for a diary day."""
    return f"{base_url.rstrip('/')}/entries/{date_key}"


def project_item(entry: DiaryEntry, base_url: str) -> FeedItem:
    """Turn a finalized entry into a feed item."""
    link = entry_link(base_url, entry.date)
    return FeedItem(
        title=f"{entry.date}の日記",
        link=link,
        guid=link,
        pub_date=format_feed_timestamp(entry.updated_at),
        description=make_preview(entry.content, FEED_DESCRIPTION_LENGTH),
    )


def project_items(entries: list[DiaryEntry], base_url: str) -> list[FeedItem]:
    """Turn finalized entries (newest first) into feed items, keeping order."""
    return [project_item(entry, base_url) for entry in entries]


def _render_item(item: FeedItem) -> str:
    return (
        "    <item>\n"
        f"      <title>{escape_xml(item.title)}</title>\n"
        f"      <link>{escape_xml(item.link)}</link>\n"
        f"      <guid>{escape_xml(item.guid)}</guid>\n"
        f"      <pubDate>{escape_xml(item.pub_date)}</pubDate>\n"
        f"      <description>{escape_xml(item.description)}</description>\n"
        "    </item>"
    )


def render_rss(entries: list[DiaryEntry], base_url: str) -> str:
    """Render an RSS 2.0 document.

    Callers pass finalized entries only. Today's entry is still being
    written and is never syndicated.
    """
    base_url = base_url.rstrip("/")
    items = "\n".join(_render_item(item) for item in project_items(entries, base_url))
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0">',
        "  <channel>",
        f"    <title>{escape_xml(FEED_TITLE)}</title>",
        f"    <link>{escape_xml(base_url)}</link>",
        f"    <description>{escape_xml(FEED_DESCRIPTION)}</description>",
        f"    <language>{FEED_LANGUAGE}</language>",
    ]
    if items:
        lines.append(items)
    lines.extend(["  </channel>", "</rss>"])
    return "\n".join(lines)
