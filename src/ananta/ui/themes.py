"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Warm stone and sand palette, dark and low-contrast for quiet reading
ANANTA_DUSK = Theme(
    name="ananta-dusk",
    # Core palette
    primary="#c8a46e",      # Sand - main accent
    secondary="#a8a29e",    # Stone - model messages
    accent="#e7d3ac",       # Pale sand - highlights
    foreground="#f2ece0",   # Parchment text
    background="#0c0a09",   # Stone 950 - deepest background
    success="#9fb88a",      # Sage - confirmations
    warning="#d9a066",      # Saffron - warnings
    error="#d97a6c",        # Terracotta - errors
    surface="#1c1917",      # Stone 900 - main surface
    panel="#171412",        # Between background and surface
    dark=True,
    variables={
        # Cursor styling
        "block-cursor-foreground": "#0c0a09",
        "block-cursor-background": "#e7d3ac",
        "block-cursor-text-style": "bold",
        "block-cursor-blurred-foreground": "#f2ece0",
        "block-cursor-blurred-background": "#44403c",
        "block-hover-background": "#292524 20%",

        # Input styling
        "input-cursor-background": "#f2ece0",
        "input-cursor-foreground": "#0c0a09",
        "input-selection-background": "#c8a46e 30%",

        # Border colors
        "border": "#44403c",
        "border-blurred": "#292524",

        # Scrollbar styling
        "scrollbar": "#292524",
        "scrollbar-hover": "#44403c",
        "scrollbar-active": "#c8a46e",
        "scrollbar-background": "#171412",
        "scrollbar-corner-color": "#171412",

        # Footer styling
        "footer-foreground": "#d6d3d1",
        "footer-background": "#0c0a09",
        "footer-key-foreground": "#e7d3ac",
        "footer-key-background": "#292524",
        "footer-description-foreground": "#a8a29e",

        # Text variants
        "text-muted": "#78716c",
        "text-disabled": "#44403c",

        # Button styling
        "button-foreground": "#f2ece0",
        "button-color-foreground": "#0c0a09",
        "button-focus-text-style": "bold reverse",
    },
)
