def theme_palette_for_variant(variant):
    use_variant = str(variant).upper()
    if use_variant == "LIGHT":
        return {
            "bg": "#f3f5f8",
            "fg": "#1d2430",
            "panel": "#ffffff",
            "accent": "#dde3ec",
            "button_active": "#c9d3e1",
            "button_pressed": "#b7c3d4",
            "select_bg": "#2f6fb0",
            "select_fg": "#ffffff",
            "editor_bg": "#ffffff",
            "editor_fg": "#1d2430",
            "insert": "#1d2430",
            "muted_fg": "#5d6b7e",
        }
    return {
        "bg": "#0f131a",
        "fg": "#e6e6e6",
        "panel": "#161b24",
        "accent": "#2a3342",
        "button_active": "#3a465c",
        "button_pressed": "#222a36",
        "select_bg": "#2f3a4d",
        "select_fg": "#ffffff",
        "editor_bg": "#11161f",
        "editor_fg": "#e6e6e6",
        "insert": "#ffffff",
        "muted_fg": "#8d9bb0",
    }


def validation_chip_palette(variant, valid):
    use_variant = str(variant).upper()
    if valid:
        if use_variant == "LIGHT":
            return {"bg": "#e3f4e8", "fg": "#1f6b37", "border": "#7cc293"}
        return {"bg": "#12281b", "fg": "#8fe0a8", "border": "#2f6b45"}
    if use_variant == "LIGHT":
        return {"bg": "#fbe6e6", "fg": "#a32020", "border": "#e08a8a"}
    return {"bg": "#3a1418", "fg": "#ffb3b3", "border": "#8a2d36"}


def error_palette(variant):
    use_variant = str(variant).upper()
    if use_variant == "LIGHT":
        return {
            "line_bg": "#fde2e2",
            "overlay_bg": "#fff6f6",
            "overlay_fg": "#3a0d0d",
            "border": "#d14b4b",
        }
    return {
        "line_bg": "#4a1c22",
        "overlay_bg": "#11161f",
        "overlay_fg": "#ffffff",
        "border": "#d14b4b",
    }
