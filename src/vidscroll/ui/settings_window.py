"""Settings dialog for the API key and region."""

import customtkinter as ctk

from .components import COLORS


class SettingsWindow(ctk.CTkToplevel):
    """Settings Window - API configuration"""
    def __init__(self, parent):
        super().__init__(parent)

        self.title("Settings - VidScroll")
        self.geometry("560x360")
        self.transient(parent)
        self.grab_set()

        self.parent = parent
        self.config = parent.config
        fonts = parent.fonts

        self.configure(fg_color=COLORS["background"])

        main = ctk.CTkFrame(self, fg_color="transparent")
        main.pack(fill="both", expand=True, padx=32, pady=24)

        ctk.CTkLabel(main, text="Settings", font=fonts["h1"],
                     text_color=COLORS["text_primary"]).pack(anchor="w")
        ctk.CTkLabel(main, text="Search requests need an API key for the video search API.",
                     font=fonts["body"], text_color=COLORS["text_secondary"]).pack(anchor="w", pady=(4, 20))

        ctk.CTkLabel(main, text="API Key", font=fonts["body"],
                     text_color=COLORS["text_primary"]).pack(anchor="w", pady=(0, 6))
        self.api_key_var = ctk.StringVar(value=self.config.api_key)
        ctk.CTkEntry(main, textvariable=self.api_key_var, show="*", font=fonts["body"],
                     height=40, corner_radius=10).pack(fill="x", pady=(0, 16))

        ctk.CTkLabel(main, text="Region Code", font=fonts["body"],
                     text_color=COLORS["text_primary"]).pack(anchor="w", pady=(0, 6))
        self.region_var = ctk.StringVar(value=self.config.region_code)
        ctk.CTkEntry(main, textvariable=self.region_var, font=fonts["body"],
                     height=40, width=120, corner_radius=10).pack(anchor="w")

        btn_row = ctk.CTkFrame(main, fg_color="transparent")
        btn_row.pack(side="bottom", anchor="e", pady=(16, 0))

        ctk.CTkButton(btn_row, text="Cancel", font=fonts["body"], height=40, width=100,
                      fg_color="transparent", hover_color=COLORS["border"],
                      text_color=COLORS["text_primary"], border_width=1, border_color=COLORS["border"],
                      corner_radius=10, cursor="hand2", command=self.destroy).pack(side="left", padx=(0, 12))

        ctk.CTkButton(btn_row, text="Save Changes", font=fonts["body"], height=40, width=120,
                      fg_color=COLORS["primary"], hover_color=COLORS["primary_hover"],
                      text_color="white", corner_radius=10, cursor="hand2",
                      command=self.save_settings).pack(side="left")

    def save_settings(self):
        self.config.set_api_key(self.api_key_var.get())
        self.config.set_region_code(self.region_var.get())
        self.destroy()
