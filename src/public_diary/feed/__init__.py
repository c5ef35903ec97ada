"""Syndication feed rendering."""

from public_diary.feed.escaping import escape_html, escape_xml
from public_diary.feed.rss import FeedItem, project_items, render_rss

__all__ = ["FeedItem", "escape_html", "escape_xml", "project_items", "render_rss"]
