"""Entry point: oneshot search from the command line."""

import sys

from personfinder.contracts.person_search_v1 import SearchQuery

HINT_FLAGS = ("--location", "--university", "--company")


def parse_query(args: list[str]) -> SearchQuery:
    """Name words plus optional `--location X`, `--university Y`, `--company Z`."""
    hints: dict[str, str] = {}
    name_parts: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        flag, _, inline_value = arg.partition("=")
        if flag in HINT_FLAGS:
            if inline_value:
                value = inline_value
            elif i + 1 < len(args):
                i += 1
                value = args[i]
            else:
                value = ""
            hints[flag[2:]] = value
        else:
            name_parts.append(arg)
        i += 1
    return SearchQuery(text=" ".join(name_parts), **hints)


def main():
    args = sys.argv[1:]
    if args and args[0].lower() == "oneshot":
        args = args[1:]
    if args and args[0] in ("-h", "--help"):
        print("Usage: python -m personfinder.main [oneshot] <name> [--location X] [--university Y] [--company Z]")
        sys.exit(0)

    from personfinder.interfaces.oneshot import main as run_oneshot_main

    query = parse_query(args)
    if query.is_empty and not sys.stdin.isatty():
        query = SearchQuery(
            text=sys.stdin.read(),
            location=query.location,
            university=query.university,
            company=query.company,
        )
    sys.exit(run_oneshot_main(query))


if __name__ == "__main__":
    main()
