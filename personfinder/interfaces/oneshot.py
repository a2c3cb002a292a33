"""One-shot interface: run a single search, print the result columns, exit."""

from __future__ import annotations

import asyncio
import sys

from personfinder.contracts.person_search_v1 import (
    ResultBuckets,
    SearchQuery,
    SearchRecord,
    SourceNetwork,
    ViewState,
    ViewStatus,
)
from personfinder.core.bootstrap import create_orchestrator

COLUMN_TITLES: dict[SourceNetwork, str] = {
    SourceNetwork.LINKEDIN: "LinkedIn",
    SourceNetwork.FACEBOOK: "Facebook",
    SourceNetwork.TWITTER: "Twitter / X",
}


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    CYAN = "\033[36m"


def colorize(text: str, *colors: str) -> str:
    if not sys.stdout.isatty():
        return text
    color_codes = "".join(colors)
    return f"{color_codes}{text}{Colors.RESET}"


def render_record(record: SearchRecord) -> str:
    name = record.name or "(unnamed profile)"
    lines = [f"  • {name}" + (f" · {record.title}" if record.title else "")]
    if record.location:
        lines.append(f"    {record.location}")
    if record.description:
        lines.append(f"    {record.description}")
    if record.link:
        lines.append(colorize(f"    {record.link}", Colors.CYAN))
    return "\n".join(lines)


def render_buckets(buckets: ResultBuckets) -> str:
    sections = []
    for network, records in buckets.visible().items():
        header = colorize(f"{COLUMN_TITLES[network]} ({len(records)})", Colors.BOLD)
        if records:
            body = "\n".join(render_record(r) for r in records)
        else:
            body = colorize("  No results found", Colors.DIM)
        sections.append(f"{header}\n{body}")
    return "\n\n".join(sections)


def render_state(state: ViewState) -> str:
    if state.status is ViewStatus.SUCCESS and state.buckets is not None:
        return render_buckets(state.buckets)
    if state.status is ViewStatus.FAILURE:
        return colorize(state.message or "", Colors.RED)
    if state.status is ViewStatus.LOADING:
        return colorize("Searching...", Colors.DIM)
    return ""


async def run_oneshot(query: SearchQuery) -> int:
    if query.is_empty:
        print("Error: a name to search for is required")
        return 2

    def _show_loading(state: ViewState) -> None:
        if state.status is ViewStatus.LOADING:
            print(render_state(state))

    orchestrator = create_orchestrator(on_change=_show_loading)
    try:
        state = await orchestrator.submit(query)
    finally:
        await orchestrator.close()
    print(render_state(state))
    return 0 if state.status is ViewStatus.SUCCESS else 1


def main(query: SearchQuery) -> int:
    return asyncio.run(run_oneshot(query))
