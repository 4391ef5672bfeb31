import logging
import tkinter as tk

from usersecrets.core import constants as app_constants
from usersecrets.services import theme_service

_LOG = logging.getLogger(__name__)


def _overlay_metrics(owner):
    base_font = max(6, int(getattr(owner, "_font_size", 10) or 10))
    return {
        "title_font_size": max(8, base_font),
        "text_font_size": max(8, base_font - 1),
        "pad_x": 10,
        "pad_y": 8,
    }


def show_error_popup(owner, message, title=app_constants.POPUP_TITLE):
    # Floating card pinned to the top-right of the editor pane.
    hide_error_popup(owner)
    if not message:
        return None
    palette = theme_service.error_palette(getattr(owner, "_app_theme", app_constants.APP_THEME_DEFAULT))
    metrics = _overlay_metrics(owner)
    overlay = tk.Frame(
        owner.text,
        bg=palette["overlay_bg"],
        bd=0,
        highlightthickness=2,
        highlightbackground=palette["border"],
        highlightcolor=palette["border"],
    )
    header = tk.Frame(overlay, bg=palette["overlay_bg"])
    header.pack(fill="x", padx=metrics["pad_x"], pady=(metrics["pad_y"], 0))
    tk.Label(
        header,
        text=f"⚠ {title}",
        bg=palette["overlay_bg"],
        fg=palette["border"],
        font=(owner._preferred_mono_family(), metrics["title_font_size"], "bold"),
        anchor="w",
    ).pack(side="left")
    close_btn = tk.Label(
        header,
        text="✕",
        bg=palette["overlay_bg"],
        fg=palette["overlay_fg"],
        cursor="hand2",
    )
    close_btn.pack(side="right", padx=(12, 0))
    close_btn.bind("<Button-1>", lambda _event: hide_error_popup(owner))
    tk.Label(
        overlay,
        text=message,
        bg=palette["overlay_bg"],
        fg=palette["overlay_fg"],
        font=(owner._preferred_mono_family(), metrics["text_font_size"]),
        anchor="w",
        justify="left",
        wraplength=420,
    ).pack(fill="both", padx=metrics["pad_x"], pady=metrics["pad_y"])
    overlay.place(relx=1.0, x=-12, y=12, anchor="ne")
    overlay.lift()
    owner.error_overlay = overlay
    return overlay


def hide_error_popup(owner):
    overlay = getattr(owner, "error_overlay", None)
    owner.error_overlay = None
    if overlay is None:
        return
    try:
        overlay.destroy()
    except tk.TclError as exc:
        _LOG.debug("expected_error", exc_info=exc)


def toggle_error_popup(owner):
    if getattr(owner, "error_overlay", None) is not None:
        hide_error_popup(owner)
        return None
    return show_error_popup(owner, getattr(owner, "_validation_error", None))
