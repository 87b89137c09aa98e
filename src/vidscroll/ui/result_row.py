"""One row of the search results list."""

import customtkinter as ctk
from customtkinter import CTkImage

from ..core import ResultItem, ThumbnailLoader, ThumbnailSlot
from .components import COLORS, THUMB_SIZE


class ResultRow(ctk.CTkFrame):
    """Thumbnail, title and description for a single result."""

    def __init__(self, parent, item: ResultItem, page_index: int, item_index: int,
                 loader: ThumbnailLoader, fonts: dict):
        super().__init__(parent)
        self.item = item
        self.page_index = page_index
        self.item_index = item_index
        self.fonts = fonts
        self.thumbnail = ThumbnailSlot(item.high_thumbnail, loader, self._set_image, size=THUMB_SIZE)

        self.setup_ui()

    def setup_ui(self):
        self.configure(fg_color=COLORS["card"], corner_radius=12,
                       border_width=1, border_color=COLORS["border"])

        thumb_w, thumb_h = THUMB_SIZE
        thumb_box = ctk.CTkFrame(self, fg_color="transparent", width=thumb_w, height=thumb_h)
        thumb_box.pack(side="left", padx=(12, 16), pady=12)
        thumb_box.pack_propagate(False)

        # Blank placeholder until the image arrives
        self.lbl_thumb = ctk.CTkLabel(
            thumb_box, text="", fg_color=COLORS["placeholder"], corner_radius=8,
            width=thumb_w, height=thumb_h
        )
        self.lbl_thumb.pack(fill="both", expand=True)

        info = ctk.CTkFrame(self, fg_color="transparent")
        info.pack(side="left", fill="both", expand=True, pady=12, padx=(0, 12))

        ctk.CTkLabel(
            info, text=self.item.title, font=self.fonts["title"],
            text_color=COLORS["text_primary"], anchor="w", justify="left", wraplength=520
        ).pack(fill="x", pady=(0, 4))
        ctk.CTkLabel(
            info, text=self.item.description, font=self.fonts["body"],
            text_color=COLORS["text_secondary"], anchor="w", justify="left", wraplength=520
        ).pack(fill="x")

    @property
    def is_visible(self) -> bool:
        return self.thumbnail.is_visible

    def show(self):
        """Row scrolled into view."""
        self.thumbnail.show()

    def hide(self):
        """Row scrolled out of view; drop any pending thumbnail load."""
        self.thumbnail.hide()

    def destroy(self):
        self.thumbnail.cancel()
        super().destroy()

    def _set_image(self, pil_img):
        if not self.winfo_exists():
            return
        ctk_img = CTkImage(light_image=pil_img, dark_image=pil_img, size=THUMB_SIZE)
        self.lbl_thumb.configure(image=ctk_img, text="")
        self.lbl_thumb.image = ctk_img
