"""Main editor UI build service."""

from usersecrets.core import constants as app_constants


# Owner handles callbacks and state; this service builds and wires panels.
def build_ui(owner, tk, ttk):
    owner._apply_theme()
    owner._set_window_icon()

    header = ttk.Frame(owner.root)
    header.pack(fill="x", padx=6, pady=(6, 2))
    ttk.Button(header, text="Open Folder…", command=owner.open_folder).pack(side="left")
    owner.folder_label = ttk.Label(header, text="No folder selected", style="Muted.TLabel")
    owner.folder_label.pack(side="left", padx=(10, 0))
    owner.save_button = ttk.Button(header, text="Save", command=owner.save_current, state="disabled")
    owner.save_button.pack(side="right")
    owner.format_button = ttk.Button(header, text="Format", command=owner.format_current)
    owner.format_button.pack(side="right", padx=(0, 6))

    body = ttk.Panedwindow(owner.root, orient="horizontal")
    body.pack(fill="both", expand=True, padx=6, pady=(2, 0))
    left = ttk.Frame(body)
    right = ttk.Frame(body)
    body.add(left, weight=1)
    body.add(right, weight=3)

    owner.filter_var = tk.StringVar(value="")
    filter_entry = ttk.Entry(left, textvariable=owner.filter_var)
    filter_entry.pack(fill="x", pady=(0, 4))
    owner.filter_var.trace_add("write", lambda *_args: owner._refresh_project_list())

    list_host = ttk.Frame(left)
    list_host.pack(fill="both", expand=True)
    owner.project_list = tk.Listbox(list_host, activestyle="none", exportselection=False)
    owner.project_list.pack(fill="both", expand=True, side="left")
    list_scroll = ttk.Scrollbar(list_host, orient="vertical", command=owner.project_list.yview)
    list_scroll.pack(fill="y", side="right")
    owner.project_list.configure(yscrollcommand=list_scroll.set)
    owner.project_list.bind("<<ListboxSelect>>", owner._on_project_select)

    info = ttk.Frame(right)
    info.pack(fill="x")
    owner.project_title = ttk.Label(info, text="", style="Title.TLabel")
    owner.project_title.pack(side="left")
    owner.secrets_id_label = ttk.Label(info, text="", style="Muted.TLabel")
    owner.secrets_id_label.pack(side="left", padx=(10, 0))

    owner.tabs = ttk.Notebook(right)
    owner.tabs.pack(fill="x", pady=(4, 0))
    owner._tab_frames = {}
    for tab, label in (
        (app_constants.TAB_SECRETS, app_constants.SECRETS_FILENAME),
        (app_constants.TAB_LOCAL_SETTINGS, app_constants.LOCAL_SETTINGS_FILENAME),
        (app_constants.TAB_APP_SETTINGS, "appsettings (read-only)"),
    ):
        frame = ttk.Frame(owner.tabs)
        owner.tabs.add(frame, text=label)
        owner._tab_frames[tab] = frame
    owner.tabs.bind("<<NotebookTabChanged>>", owner._on_tab_changed)

    owner.app_settings_var = tk.StringVar(value="")
    owner.app_settings_picker = ttk.Combobox(right, textvariable=owner.app_settings_var, state="readonly")
    owner.app_settings_picker.bind("<<ComboboxSelected>>", owner._on_app_settings_selected)

    editor_host = ttk.Frame(right)
    editor_host.pack(fill="both", expand=True, pady=(4, 0))
    owner._editor_host = editor_host
    owner.text = tk.Text(
        editor_host,
        wrap="none",
        undo=True,
        autoseparators=True,
        maxundo=200,
        padx=6,
    )
    owner.text.pack(fill="both", expand=True, side="left")
    text_scroll = ttk.Scrollbar(editor_host, orient="vertical", command=owner.text.yview)
    text_scroll.pack(fill="y", side="right")
    owner.text.configure(yscrollcommand=text_scroll.set)
    owner._style_text_widget()
    owner.text.bind("<<Modified>>", owner._on_text_modified, add="+")

    footer = ttk.Frame(owner.root)
    footer.pack(fill="x", padx=6, pady=(2, 6))
    owner.status_label = ttk.Label(footer, text="", style="Muted.TLabel")
    owner.status_label.pack(side="left")
    owner.validation_chip = tk.Label(footer, text="", padx=8, pady=1, cursor="hand2")
    owner.validation_chip.pack(side="right")
    owner.validation_chip.bind("<Button-1>", owner._on_validation_chip_click)

    bind_shortcuts(owner)
    owner.root.protocol("WM_DELETE_WINDOW", owner.on_close)


def shortcut_bindings(owner):
    return (
        ("<Control-o>", owner.open_folder),
        ("<Control-s>", owner.save_current),
        ("<Control-Shift-F>", owner.format_current),
        ("<Escape>", owner._hide_error_popup),
        ("<Control-l>", owner.show_last_diagnostic),
        ("<Control-plus>", lambda: owner.adjust_font_size(1)),
        ("<Control-equal>", lambda: owner.adjust_font_size(1)),
        ("<Control-minus>", lambda: owner.adjust_font_size(-1)),
        ("<Control-t>", owner.toggle_theme),
    )


def _swallow(action):
    def _handler(_event=None):
        action()
        return "break"

    return _handler


def bind_shortcuts(owner):
    # Text's class bindings own several of these keys (Ctrl+O open-line,
    # Ctrl+T transpose); the widget binding runs first and stops them.
    for sequence, action in shortcut_bindings(owner):
        handler = _swallow(action)
        owner.root.bind(sequence, handler, add="+")
        owner.text.bind(sequence, handler, add="+")
