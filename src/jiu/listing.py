from __future__ import annotations

from jiu.resolver import ListingEntry, RecipeListing


def _usage(entry: ListingEntry) -> str:
    parts = [", ".join(entry.names)]
    parts.extend(slot.spec for slot in entry.arguments)
    return " ".join(parts)


def render_listing(listing: RecipeListing) -> str:
    lines: list[str] = []
    if listing.description:
        lines.append(listing.description)
        lines.append("")

    if not listing.entries:
        lines.append("No recipes defined.")
        return "\n".join(lines)

    lines.append("Available recipes:")
    usages = [_usage(entry) for entry in listing.entries]
    width = max(len(u) for u in usages)
    for usage, entry in zip(usages, listing.entries, strict=True):
        if entry.description:
            lines.append(f"  {usage.ljust(width)}  {entry.description}")
        else:
            lines.append(f"  {usage}")
    return "\n".join(lines)
