"""Server-side HTML for a single entry page."""

from __future__ import annotations

from html import escape

from history.models import EntryView
from history.validation import MAX_CONTENT_LENGTH

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>History #{current_index}</title>
</head>
<body>
<main>
{body}
<nav>
{prev}
<span class="position">{current_index} / {total_count}</span>
{next}
</nav>
</main>
</body>
</html>
"""

_VIEW = """<blockquote class="content">{content}</blockquote>
<p class="timestamp">{timestamp}</p>
<p><a href="{edit_link}">Write something new</a></p>"""

_EDIT = """<form method="post" action="/save">
<textarea name="newText" maxlength="{max_length}" required autofocus>{content}</textarea>
<p class="timestamp">{timestamp}</p>
<button type="submit">Save</button>
<a href="{view_link}">Cancel</a>
</form>"""


def _link(href: str | None, label: str) -> str:
    if not href:
        return ""
    return f'<a href="{escape(href)}">{label}</a>'


def render_entry_page(view: EntryView, editing: bool = False) -> str:
    if editing:
        body = _EDIT.format(
            max_length=MAX_CONTENT_LENGTH,
            content=escape(view.content),
            timestamp=escape(view.timestamp),
            view_link=f"/entry/{view.current_index}",
        )
    else:
        body = _VIEW.format(
            content=escape(view.content),
            timestamp=escape(view.timestamp),
            edit_link=escape(view.edit_link),
        )

    return _PAGE.format(
        body=body,
        prev=_link(view.prev_link, "&larr; Previous"),
        next=_link(view.next_link, "Next &rarr;"),
        current_index=view.current_index,
        total_count=view.total_count,
    )
