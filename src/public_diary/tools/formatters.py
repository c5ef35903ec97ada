"""Compact output formatters for MCP tool responses."""

from public_diary.models.entry import DiaryEntry, SaveOutcome
from public_diary.models.version import DiaryVersion


def format_timestamp(entry: DiaryEntry | DiaryVersion) -> str:
    """Format: 2025-01-15T10:30:45+00:00."""
    stamp = entry.updated_at if isinstance(entry, DiaryEntry) else entry.created_at
    return stamp.isoformat(timespec="seconds")


def format_entry_header(entry: DiaryEntry, can_edit: bool) -> str:
    """Format: [2025-01-15] editable | updated 2025-01-15T10:30:45+00:00."""
    state = "editable" if can_edit else "final"
    return f"[{entry.date}] {state} | updated {format_timestamp(entry)}"


def format_entry_full(entry: DiaryEntry, can_edit: bool) -> str:
    """Header + full content. For diary_read."""
    return f"{format_entry_header(entry, can_edit)}\n{entry.content}"


def format_entry_summary(entry: DiaryEntry) -> str:
    """Format: [2025-01-15] first 100 characters..."""
    return f"[{entry.date}] {entry.preview}"


def format_version_summary(version: DiaryVersion) -> str:
    """Format: v2 | 2025-01-15T10:30:45+00:00 | first 100 characters..."""
    return f"v{version.version_number} | {format_timestamp(version)} | {version.preview}"


def format_version_full(version: DiaryVersion) -> str:
    """Header + full archived content."""
    header = (
        f"[{version.entry_date}] v{version.version_number}"
        f" | archived {format_timestamp(version)}"
    )
    return f"{header}\n{version.content}"


def format_version_list(
    date_key: str, current: DiaryEntry | None, versions: list[DiaryVersion]
) -> str:
    """Current content followed by archived versions, newest first."""
    lines = [f"Versions of {date_key}"]
    if current is not None:
        lines.append(f"Current: {current.preview}")
    else:
        lines.append("Current: (no entry)")
    if not versions:
        lines.append("No archived versions.")
        return "\n".join(lines)
    lines.append(f"{len(versions)} archived version(s)")
    lines.append("")
    lines.extend(format_version_summary(v) for v in versions)
    return "\n".join(lines)


def format_save_result(outcome: SaveOutcome) -> str:
    """Format the result of a save for the MCP response."""
    entry = outcome.entry
    line = f"Saved entry for {entry.date} ({len(entry.content)} characters)"
    if outcome.archived is not None:
        line += f"\n  Previous content archived as v{outcome.archived.version_number}"
    return line


def format_result_list(formatted_entries: list[str], header: str | None = None) -> str:
    """Count + entries one per line."""
    if not formatted_entries:
        return "No entries found."
    lines: list[str] = []
    if header:
        lines.append(header)
    count = len(formatted_entries)
    lines.append("1 entry" if count == 1 else f"{count} entries")
    lines.append("")
    lines.extend(formatted_entries)
    return "\n".join(lines)
