"""
Design (ui.py)
- Purpose: Build and manage the Tkinter window (joke, heart, "Another One!", favourites, logs).
- Inputs: JokeFlow (state + actions) and its FavouritesRepo.
- Outputs: None (renders UI, forwards clicks to the flow).
- Side effects: Creates windows; may show desktop notifications on errors.
- Thread-safety: UI code runs on main thread; the flow posts worker results with post(),
                 and log lines arrive through append_log(), both rescheduled via Tk.after().
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable

from .config import LOG_MAX_LINES, WINDOW_TITLE
from .flow import JokeFlow
from .state import AppState
from .utils import lines_to_trim, notify

logger = logging.getLogger(__name__)

BG = "#1e1e1e"
PANEL_BG = "#2b2b2b"
HEART_ON = "#FF6A6A"
HEART_OFF = "#888888"


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Public attributes:
        enable_notifications (tk.BooleanVar): toggles desktop notifications for errors
        show_logs (tk.BooleanVar): toggles visibility of the logs panel
    - Public methods:
        post(): thread-safe way for the flow to run a callable on the Tk thread
        append_log(): thread-safe sink for UILogHandler
        render(): repaint from an AppState (flow.on_change)
        show_error(): flow.on_error
    """

    def __init__(self, root: tk.Tk, flow_factory: Callable[["AppUI"], JokeFlow]):
        self.root = root

        # UI state variables
        self.enable_notifications = tk.BooleanVar(value=False)
        self.show_logs = tk.BooleanVar(value=False)

        # Window
        self.root.title(WINDOW_TITLE)
        self.root.rowconfigure(0, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg=BG)

        # Paned window: top = content, bottom = logs (when shown)
        self.paned = ttk.PanedWindow(self.root, orient=tk.VERTICAL)
        self.paned.grid(row=0, column=0, sticky="nsew")

        content = tk.Frame(self.paned, bg=BG)
        content.columnconfigure(0, weight=1)
        content.rowconfigure(4, weight=1)
        self.paned.add(content, weight=1)

        self.bottom_frame = tk.Frame(self.paned, bg=BG)
        self.logs_box = tk.Text(self.bottom_frame, height=6, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")
        self.paned.add(self.bottom_frame, weight=0)  # collapsed until Show Logs is checked

        def _keep_sash_collapsed(_event=None):
            if not self.show_logs.get():
                self._collapse_bottom()

        self.paned.bind("<Configure>", _keep_sash_collapsed)

        # Style
        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background=PANEL_BG,
            foreground="#f0f0f0",
            fieldbackground=PANEL_BG,
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background=BG,
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[("selected", "#444")], foreground=[])

        # Joke box
        self.joke_label = tk.Label(
            content,
            text="",
            bg=PANEL_BG,
            fg="#f0f0f0",
            font=("Georgia", 16),
            justify="left",
            wraplength=460,
            padx=24,
            pady=24,
            highlightthickness=3,
            highlightbackground="#f0f0f0",
        )
        self.joke_label.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))

        # Heart + Another One!
        actions = tk.Frame(content, bg=BG)
        actions.grid(row=1, column=0, pady=5)
        self.heart_button = tk.Button(
            actions,
            text="♥",
            font=("Segoe UI", 22),
            fg=HEART_OFF,
            bg=BG,
            activebackground=BG,
            relief="flat",
            borderwidth=0,
            command=self.on_heart,
        )
        self.heart_button.pack(side=tk.LEFT, padx=10)
        self.another_button = ttk.Button(actions, text="Another One!", command=self.on_another)
        self.another_button.pack(side=tk.LEFT, padx=10)

        # Status line (last error)
        self.status_label = tk.Label(content, text="", bg=BG, fg=HEART_ON, anchor="w")
        self.status_label.grid(row=2, column=0, sticky="ew", padx=10)

        tk.Label(content, text="Favourites", bg=BG, fg="#ffffff", anchor="w",
                 font=("Segoe UI", 10, "bold")).grid(row=3, column=0, sticky="ew", padx=10, pady=(8, 0))

        self.tree = ttk.Treeview(content, columns=("joke",), show="headings", height=8)
        self.tree.heading("joke", text="Joke")
        self.tree.grid(row=4, column=0, sticky="nsew", padx=10, pady=(2, 5))

        # Toggles
        toggles = tk.Frame(content, bg=BG)
        toggles.grid(row=5, column=0, sticky="ew", padx=10, pady=(0, 10))
        tk.Checkbutton(
            toggles,
            text="Enable Notifications",
            variable=self.enable_notifications,
            fg="white",
            bg=BG,
            selectcolor=PANEL_BG,
            activebackground=BG,
            activeforeground="white",
        ).pack(side=tk.LEFT, padx=5)
        tk.Checkbutton(
            toggles,
            text="Show Logs",
            variable=self.show_logs,
            fg="white",
            bg=BG,
            selectcolor=PANEL_BG,
            activebackground=BG,
            activeforeground="white",
            command=self.toggle_logs,
        ).pack(side=tk.LEFT, padx=5)

        # Lifecycle: minimise = background; close = save and quit
        self.root.bind("<Unmap>", self.on_unmap)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        self.flow = flow_factory(self)

    # ---------- Public API for the flow / logging ----------

    def post(self, fn: Callable[[], None]) -> None:
        """Run fn on the Tk thread. Safe to call from any thread."""
        self.root.after(0, fn)

    def append_log(self, line: str) -> None:
        self.root.after(0, lambda: self._append_log(line))

    def render(self, state: AppState) -> None:
        """
        Purpose: Repaint joke text, heart colour, button state, status line and favourites.
        Thread-safety: Must run on main thread.
        """
        self.joke_label.configure(text=state.current_joke.joke)
        self.heart_button.configure(fg=HEART_ON if state.added_to_favourites else HEART_OFF)
        self.another_button.configure(state="disabled" if state.fetching else "normal")
        self.status_label.configure(text=state.last_error or "")

        self.tree.delete(*self.tree.get_children())
        for joke in self.flow.repo.snapshot():
            self.tree.insert("", "end", values=(joke.joke,))

    def show_error(self, message: str) -> None:
        if self.enable_notifications.get():
            notify(message)

    # ---------- UI callbacks ----------

    def on_heart(self) -> None:
        self.flow.mark_favourite()

    def on_another(self) -> None:
        self.flow.request_joke()

    def on_unmap(self, event) -> None:
        # <Unmap> also fires for child widgets; only react to the root window
        if event.widget is self.root:
            self.flow.on_background()

    def on_close(self) -> None:
        try:
            self.flow.shutdown()
        finally:
            self.root.destroy()

    def toggle_logs(self) -> None:
        """Show/hide the logs panel by resizing the bottom pane."""
        if self.show_logs.get():
            self.paned.pane(self.bottom_frame, weight=1)
            self.logs_box.pack(fill=tk.BOTH, expand=True, padx=10, pady=(0, 6))
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, int(total * 0.7))
        else:
            self.logs_box.pack_forget()
            self.paned.pane(self.bottom_frame, weight=0)
            self._collapse_bottom()

    # ---------- internal helpers ----------

    def _collapse_bottom(self) -> None:
        self.paned.update_idletasks()
        total = self.paned.winfo_height()
        if total > 0:
            self.paned.sashpos(0, total)

    def _append_log(self, text: str) -> None:
        """
        Purpose: Append one line to the Logs panel and trim to LOG_MAX_LINES.
        Thread-safety: Main thread only (called via after()).
        """
        self.logs_box.configure(state="normal")
        self.logs_box.insert("end", text)
        self.logs_box.see("end")
        total_lines = int(self.logs_box.index("end-1c").split(".")[0])
        remove = lines_to_trim(total_lines, LOG_MAX_LINES)
        if remove:
            self.logs_box.delete("1.0", f"{remove + 1}.0")
        self.logs_box.configure(state="disabled")
