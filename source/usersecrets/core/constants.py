APP_NAME = ".NET User Secrets Editor"
APP_VERSION = "1.0.0"

RUNTIME_DIR_NAME = "UserSecretsEditor"
SETTINGS_FILENAME = "usersecrets_editor_settings.json"
DIAG_LOG_FILENAME = "secrets_json_diagnostics.log"
DIAG_LOG_MAX_BYTES = 512 * 1024
DIAG_LOG_KEEP_BYTES = 256 * 1024
DIAG_LOG_KEEP_DAYS = 2
DIAG_LOG_CONTEXT_LINES = 2
DIAG_LOG_ENTRY_MARKER = "\n---\n"

# User-secrets store layout used by `dotnet user-secrets`.
USER_SECRETS_WINDOWS_PARTS = ("Microsoft", "UserSecrets")
USER_SECRETS_UNIX_PARTS = (".microsoft", "usersecrets")
SECRETS_FILENAME = "secrets.json"
LOCAL_SETTINGS_FILENAME = "local.settings.json"
APP_SETTINGS_PREFIX = "appsettings"
APP_SETTINGS_BASE_FILENAME = "appsettings.json"
PROJECT_FILE_SUFFIX = ".csproj"
AZURE_FUNCTIONS_HOST_FILENAME = "host.json"
AZURE_FUNCTIONS_SDK_MARKERS = (
    "Microsoft.NET.Sdk.Functions",
    "Microsoft.Azure.Functions",
    "Azure.Functions",
)

# Directories never worth descending into while looking for project files.
SCAN_SKIP_DIRS = frozenset(
    {
        "node_modules",
        "bin",
        "obj",
        ".git",
        ".vs",
        ".idea",
        "packages",
    }
)

NEW_SECRETS_TEMPLATE = "{\n  \n}"
APP_SETTINGS_FALLBACK = "{}"
LOAD_ERROR_PREFIX = "// Error loading file: "

TAB_SECRETS = "secrets"
TAB_LOCAL_SETTINGS = "local_settings"
TAB_APP_SETTINGS = "app_settings"
EDITABLE_TABS = (TAB_SECRETS, TAB_LOCAL_SETTINGS)

LIVE_FEEDBACK_DELAY_MS_DEFAULT = 140
FONT_SIZE_DEFAULT = 11
FONT_SIZE_MIN = 6
FONT_SIZE_MAX = 32
APP_THEMES = ("DARK", "LIGHT")
APP_THEME_DEFAULT = "DARK"

STATUS_VALID = "✓ Valid JSON"
STATUS_INVALID = "✗ Invalid JSON"
STATUS_LOADED = "Loaded"
STATUS_SAVED = "Saved"
STATUS_FORMATTED = "Formatted"
STATUS_NO_PROJECTS = "No projects with User Secrets found"
POPUP_TITLE = "JSON Validation Error"
SAVE_BLOCKED_MESSAGE = "Cannot save invalid JSON. Please fix the errors first."
