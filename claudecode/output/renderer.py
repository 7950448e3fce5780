"""Show assistant replies in a floating panel."""

from ..config import WindowConfig
from ..host import EditorHost, FloatGeometry, FloatHandle

CLOSE_KEYS = ("q", "<Esc>")


def compute_geometry(window: WindowConfig, columns: int, lines: int) -> FloatGeometry:
    """Center a panel sized as a fraction of the screen."""
    width = max(1, int(columns * window.width))
    height = max(1, int(lines * window.height))
    return FloatGeometry(
        width=width,
        height=height,
        row=(lines - height) // 2,
        col=(columns - width) // 2,
        border=window.border,
    )


def panel_title(title: str | None, window: WindowConfig) -> str:
    if not title:
        return window.title
    return f" {title.strip()} "


def show_result(
    host: EditorHost,
    text: str,
    window: WindowConfig,
    title: str | None = None,
) -> FloatHandle:
    """
    Display raw text in a modal panel closed by ``q`` or ``<Esc>``.

    Args:
        host: Editor host
        text: Reply text, shown as markdown
        window: Panel size and border settings
        title: Panel title; the configured default when omitted

    Returns:
        Handle of the opened panel
    """
    columns, lines = host.screen_size()
    geometry = compute_geometry(window, columns, lines)
    keymaps = {key: host.close_float for key in CLOSE_KEYS}
    return host.open_float(
        text.split("\n"),
        geometry,
        panel_title(title, window),
        filetype="markdown",
        keymaps=keymaps,
    )
