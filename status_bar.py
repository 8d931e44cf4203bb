import os

from render_model import RenderModel


def _edit_prefix(model: RenderModel) -> str:
    return f" {model.focus_label}> "


def render_status(model: RenderModel, width: int) -> str:
    if model.edit_text is not None:
        prefix = _edit_prefix(model)
        text = prefix + _edit_window(model, width - len(prefix))[0]
    elif model.status_message:
        text = f" {model.status_message}"
    else:
        fname = os.path.basename(model.path) if model.path else "[no file]"
        if model.dirty:
            fname += " [+]"
        sheet = f"{model.sheet_name} ({model.sheet_index + 1}/{model.sheet_count})"
        where = model.focus_label
        if model.selection is not None:
            top, left, bottom, right = model.selection
            where += f" [{bottom - top + 1}x{right - left + 1}]"
        text = f" {model.mode} | {fname} | {sheet} | {where}"

    return text.ljust(width)[:width]


def _edit_window(model: RenderModel, text_w: int) -> tuple[str, int]:
    """Visible slice of the edit text and its start offset, keeping the caret on screen."""
    text_w = max(1, text_w)
    start = max(0, model.edit_caret - text_w + 1)
    return model.edit_text[start : start + text_w], start


def caret_column(model: RenderModel, width: int) -> int | None:
    """Screen column of the edit caret in the status line, or None outside Editing."""
    if model.edit_text is None:
        return None
    prefix = _edit_prefix(model)
    _, start = _edit_window(model, width - len(prefix))
    return min(width - 1, len(prefix) + model.edit_caret - start)
