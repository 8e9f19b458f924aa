"""Entry point for launching the hook resource viewer."""
from __future__ import annotations

from hookview.views.main_view import run_gui


if __name__ == "__main__":
    run_gui()
