"""Main application window: search box and paginated results list."""

import logging
from typing import List

import customtkinter as ctk

from ..core import SearchResultPage, SearchViewModel, ThumbnailLoader, pages_to_render
from ..utils import Config
from ..version import __version__
from .components import COLORS, make_fonts
from .result_row import ResultRow
from .settings_window import SettingsWindow

logger = logging.getLogger(__name__)

# Configure CustomTkinter theme
ctk.set_appearance_mode("dark")
ctk.set_default_color_theme("blue")


class VidScrollApp(ctk.CTk):
    """Main application window for VidScroll.

    The view model and thumbnail loader are built by the caller and passed
    in; the window only renders their state and forwards user input.
    """

    def __init__(self, view_model: SearchViewModel, loader: ThumbnailLoader, config: Config):
        super().__init__()
        self.title(f"VidScroll v{__version__}")
        self.geometry("900x800")

        self.view_model = view_model
        self.loader = loader
        self.config = config
        self.fonts = make_fonts()

        self.rows: List[ResultRow] = []
        self._rendered_pages: List[SearchResultPage] = []
        self._visibility_pending = False

        self.configure(fg_color=COLORS["background"])
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self.create_header()
        self.create_search_bar()
        self.create_results_list()
        self.create_footer()

        self.view_model.add_observer(self.on_results_update)
        self.protocol("WM_DELETE_WINDOW", self.on_close)

    def create_header(self):
        header = ctk.CTkFrame(self, height=64, corner_radius=0, fg_color=COLORS["header"])
        header.grid(row=0, column=0, sticky="ew")
        header.pack_propagate(False)

        ctk.CTkLabel(header, text="Video Search", font=self.fonts["h2"],
                     text_color=COLORS["text_primary"]).pack(side="left", padx=24)

        ctk.CTkButton(header, text="Settings", width=90, height=36, corner_radius=10,
                      fg_color="transparent", hover_color=COLORS["border"],
                      text_color=COLORS["text_primary"], font=self.fonts["body"],
                      command=self.show_settings_view).pack(side="right", padx=24)

    def create_search_bar(self):
        self.search_entry = ctk.CTkEntry(
            self, placeholder_text="Search",
            font=self.fonts["body"], height=44, corner_radius=10
        )
        self.search_entry.grid(row=1, column=0, sticky="ew", padx=24, pady=16)
        self.search_entry.bind("<Return>", lambda e: self.submit_search())

    def create_results_list(self):
        self.results = ctk.CTkScrollableFrame(self, fg_color="transparent")
        self.results.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 8))

        # Check row visibility whenever the list scrolls or resizes
        canvas = self.results._parent_canvas
        scrollbar = self.results._scrollbar

        def on_yscroll(first, last):
            scrollbar.set(first, last)
            self.schedule_visibility_check()

        canvas.configure(yscrollcommand=on_yscroll)
        canvas.bind("<Configure>", lambda e: self.schedule_visibility_check(), add="+")

    def create_footer(self):
        self.footer_label = ctk.CTkLabel(self, text="", font=self.fonts["small"],
                                         text_color=COLORS["text_secondary"])
        self.footer_label.grid(row=3, column=0, sticky="ew", pady=(0, 8))

    def show_settings_view(self):
        """Open the Settings Window dialog"""
        SettingsWindow(self)

    def submit_search(self):
        query = self.search_entry.get().strip()
        if not query:
            return
        logger.info(f"Searching for {query!r}")
        self.view_model.search(query)
        self.results._parent_canvas.yview_moveto(0)

    def on_results_update(self, view_model: SearchViewModel):
        """Render rows for any pages appended since the last update."""
        pages = view_model.pages
        rebuild, start = pages_to_render(self._rendered_pages, pages)
        if rebuild:
            self.clear_rows()

        for page_index in range(start, len(pages)):
            page = pages[page_index]
            for item_index, item in enumerate(page.items):
                row = ResultRow(self.results, item, page_index, item_index, self.loader, self.fonts)
                row.pack(fill="x", padx=8, pady=4)
                self.rows.append(row)
            self._rendered_pages.append(page)

        self.footer_label.configure(text=f"{view_model.item_count} results")
        self.schedule_visibility_check()

    def clear_rows(self):
        for row in self.rows:
            row.destroy()
        self.rows = []
        self._rendered_pages = []

    def schedule_visibility_check(self):
        if self._visibility_pending:
            return
        self._visibility_pending = True
        self.after_idle(self.check_visible_rows)

    def check_visible_rows(self):
        """Show rows inside the viewport and hide the rest."""
        self._visibility_pending = False
        # Rows report y=0 until geometry has been computed
        self.results.update_idletasks()
        canvas = self.results._parent_canvas
        top = canvas.canvasy(0)
        bottom = top + canvas.winfo_height()

        for row in list(self.rows):
            if not row.winfo_exists():
                continue
            y = row.winfo_y()
            visible = y + row.winfo_height() >= top and y <= bottom
            if visible and not row.is_visible:
                row.show()
                self.view_model.item_appeared(row.page_index, row.item_index)
            elif not visible and row.is_visible:
                row.hide()

    def on_close(self):
        self.view_model.remove_observer(self.on_results_update)
        self.clear_rows()
        self.destroy()
