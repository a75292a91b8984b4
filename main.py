"""
Design (main.py)
- Purpose: Wire logging, the favourites repo, the joke flow and the Tk window, then run.
- Side effects: Opens the window; reads/writes the favourites file through the flow.
"""

import logging
import tkinter as tk

from dadjokes.flow import JokeFlow
from dadjokes.repository import FavouritesRepo
from dadjokes.ui import AppUI
from dadjokes.utils import UILogHandler, configure_logging


def main() -> None:
    configure_logging(logging.INFO)
    repo = FavouritesRepo()

    root = tk.Tk()

    def build_flow(ui: AppUI) -> JokeFlow:
        return JokeFlow(
            repo,
            on_change=ui.render,
            on_error=ui.show_error,
            post=ui.post,
        )

    ui = AppUI(root, build_flow)
    logging.getLogger().addHandler(UILogHandler(ui.append_log))

    ui.flow.start()
    root.mainloop()


if __name__ == "__main__":
    main()
