"""Reusable UI components using CustomTkinter."""

import customtkinter as ctk

# (Light, Dark) tuples
COLORS = {
    "primary": "#137fec",
    "primary_hover": "#0d6bc4",
    "background": ("#f6f7f8", "#101922"),
    "header": ("#ffffff", "#101922"),
    "card": ("#ffffff", "#1e293b"),
    "border": ("#e5e7eb", "#1e293b"),
    "placeholder": ("#e5e7eb", "#374151"),
    "text_primary": ("#111827", "#ffffff"),
    "text_secondary": ("#6b7280", "#94a3b8"),
}

THUMB_SIZE = (160, 90)


def make_fonts() -> dict:
    """Standardized font management - using Helvetica system font"""
    return {
        "h1": ctk.CTkFont(family="Helvetica", size=28, weight="bold"),
        "h2": ctk.CTkFont(family="Helvetica", size=18, weight="bold"),
        "title": ctk.CTkFont(family="Helvetica", size=14, weight="bold"),
        "body": ctk.CTkFont(family="Helvetica", size=13),
        "small": ctk.CTkFont(family="Helvetica", size=12),
    }
