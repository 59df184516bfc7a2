"""Launcher entrypoint for the Everest Meeting Meter Streamlit page."""

from __future__ import annotations

import os
import pathlib
import sys


def _bundle_root() -> pathlib.Path:
    if getattr(sys, "frozen", False):
        return pathlib.Path(getattr(sys, "_MEIPASS"))
    return pathlib.Path(__file__).resolve().parent


def streamlit_argv(app_path: pathlib.Path) -> list[str]:
    return [
        "streamlit",
        "run",
        str(app_path),
        "--server.headless=false",
        "--browser.gatherUsageStats=false",
    ]


def main() -> None:
    app_path = _bundle_root() / "app.py"

    # Disable usage stats prompt in distributed builds.
    os.environ.setdefault("STREAMLIT_BROWSER_GATHER_USAGE_STATS", "false")
    os.environ.setdefault("STREAMLIT_SERVER_HEADLESS", "false")

    from streamlit.web import cli as stcli

    sys.argv = streamlit_argv(app_path)
    raise SystemExit(stcli.main())


if __name__ == "__main__":
    main()
