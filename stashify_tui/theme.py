"""
Stashify: Themes

Warm light/dark palettes plus a high-contrast variant, registered on the app
as Textual themes. Routers only use these for header and tab colors.
"""

from textual.theme import Theme

# Design tokens per palette
TOKENS = {
    "light": {
        "text": "#2D1B12",
        "text_secondary": "#6B4E3D",
        "primary": "#D97757",
        "accent": "#7B94C4",
        "success": "#5A8F6B",
        "warning": "#E8A84F",
        "error": "#C44A3A",
        "background": "#FFF9F5",
        "surface": "#F5EDE7",
        "tab_icon_default": "#6B4E3D",
        "tab_icon_selected": "#D97757",
    },
    "dark": {
        "text": "#F5EDE7",
        "text_secondary": "#B8A99D",
        "primary": "#E8A87C",
        "accent": "#8BA3D4",
        "success": "#6A9F7B",
        "warning": "#F0B85F",
        "error": "#D45A4A",
        "background": "#1A1210",
        "surface": "#302822",
        "tab_icon_default": "#8B7A6D",
        "tab_icon_selected": "#E8A87C",
    },
    "contrast": {
        "text": "#FFFFFF",
        "text_secondary": "#FFFFFF",
        "primary": "#FFD000",
        "accent": "#00E5FF",
        "success": "#50FF80",
        "warning": "#FFD000",
        "error": "#FF5050",
        "background": "#000000",
        "surface": "#000000",
        "tab_icon_default": "#FFFFFF",
        "tab_icon_selected": "#FFD000",
    },
}

PALETTE_FOR_THEME = {
    "stashify-light": "light",
    "stashify-dark": "dark",
    "stashify-contrast": "contrast",
}


def _build_theme(name: str) -> Theme:
    palette = TOKENS[PALETTE_FOR_THEME[name]]
    return Theme(
        name=name,
        primary=palette["primary"],
        secondary=palette["text_secondary"],
        accent=palette["accent"],
        warning=palette["warning"],
        error=palette["error"],
        success=palette["success"],
        background=palette["background"],
        surface=palette["surface"],
        panel=palette["surface"],
        dark=name != "stashify-light",
    )


THEMES = [_build_theme(name) for name in PALETTE_FOR_THEME]


def theme_name(dark: bool, high_contrast: bool = False) -> str:
    if high_contrast:
        return "stashify-contrast"
    return "stashify-dark" if dark else "stashify-light"


def theme(dark: bool = False, high_contrast: bool = False) -> dict[str, str]:
    """Token set for the active palette"""
    return TOKENS[PALETTE_FOR_THEME[theme_name(dark, high_contrast)]]
