from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from markupsafe import Markup


@dataclass(frozen=True)
class ActionButton:
    title: str
    url: str
    css_class: str = ""
    icon: str = "more-horizontal"


def action_buttons(
    *,
    edit_url: Optional[str] = None,
    delete_url: Optional[str] = None,
    extras: Iterable[ActionButton] = (),
) -> list[ActionButton]:
    buttons = []
    if edit_url:
        buttons.append(ActionButton("Edit", edit_url, css_class="btn-action btn-edit", icon="edit"))
    if delete_url:
        buttons.append(ActionButton("Delete", delete_url, css_class="btn-action btn-delete", icon="trash"))
    buttons.extend(extras)
    return buttons


def render_actions(buttons: Sequence[ActionButton], *, disabled: bool = False) -> Markup:
    """Render row actions as links; the target page opens the dialog or confirmation."""
    parts = []
    for b in buttons:
        if disabled:
            parts.append(Markup('<span class="{} disabled" title="{}" data-icon="{}"></span>').format(b.css_class, b.title, b.icon))
        else:
            parts.append(
                Markup('<a class="{}" href="{}" title="{}" aria-label="{}" data-icon="{}"></a>').format(
                    b.css_class, b.url, b.title, b.title, b.icon
                )
            )
    return Markup('<div class="row-actions">{}</div>').format(Markup("").join(parts))
