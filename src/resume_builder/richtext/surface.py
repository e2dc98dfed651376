"""Editable rich-text field and the command controller that drives it.

An ``EditableSurface`` holds the document tree of one field while it is
being edited and pushes a canonical value out after every change. The
``FormatCommandController`` maps toolbar commands, keystrokes, paste and
suggestion insertion onto tree transforms.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from resume_builder.models.editor import EditorOptions, FormatState, SuggestionKind
from resume_builder.richtext import commands
from resume_builder.richtext.canonical import canonicalize
from resume_builder.richtext.document import Document, Selection
from resume_builder.richtext.empty import is_empty
from resume_builder.richtext.ingest import append_skills, suggestion_to_markup
from resume_builder.utils.url_validator import normalize_href

logger = logging.getLogger(__name__)

# prompt(message, default) -> answer, or None when dismissed
Prompt = Callable[[str, str], Optional[str]]

COMMAND_MARKS = {
    "bold": "bold",
    "italic": "italic",
    "underline": "underline",
    "strikethrough": "strikethrough",
}
SUPPORTED_COMMANDS = (*COMMAND_MARKS, "insertUnorderedList", "createLink")

_SHORTCUTS = {"b": "bold", "i": "italic", "u": "underline", "k": "createLink"}


class UnsupportedCommandError(ValueError):
    """Raised for a formatting command the surface does not implement."""


@dataclass
class KeyEvent:
    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    alt: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class ClipboardData:
    data: dict[str, str] = field(default_factory=dict)
    default_prevented: bool = False

    def get_data(self, mime_type: str) -> str:
        return self.data.get(mime_type, "")

    def prevent_default(self) -> None:
        self.default_prevented = True


class EditableSurface:
    """One rich-text field: a document tree, a selection and a stored value."""

    def __init__(
        self,
        value: str = "",
        options: EditorOptions | None = None,
        on_change: Callable[[str], None] | None = None,
    ):
        self.options = options or EditorOptions()
        self.on_change = on_change
        self.editing = False
        self.pending_marks: dict[str, bool] = {}
        self._hydrate(value)

    # -- lifecycle ---------------------------------------------------------

    def _hydrate(self, value: str) -> None:
        self._value = value or ""
        self.document = Document.from_html(self._value)
        self.selection = Selection(self.document.length)
        self.show_placeholder = is_empty(self._value)
        self.pending_marks.clear()
        self._format_state = commands.format_state(self.document, self.selection)

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, value: str) -> bool:
        """Apply an external value change; ignored while the field is being edited."""
        if self.editing:
            logger.debug("Ignoring external value while editing")
            return False
        self._hydrate(value)
        return True

    def focus(self) -> None:
        if self.editing:
            return
        self.editing = True
        if self.show_placeholder or self.document.is_blank:
            self.document = Document()
            self.selection = Selection(0)
        self.show_placeholder = False
        self.refresh_format_state()

    def blur(self) -> str:
        self.editing = False
        self.pending_marks.clear()
        markup = self.document.to_html()
        if is_empty(markup):
            self.document = Document()
            self.selection = Selection(0)
            self.show_placeholder = True
            self._emit("")
        else:
            self._emit(canonicalize(markup))
        self.refresh_format_state()
        return self._value

    # -- editing -----------------------------------------------------------

    def select(self, start: int, end: int | None = None) -> None:
        length = self.document.length
        start = max(0, min(start, length))
        end = start if end is None else max(0, min(end, length))
        self.selection = Selection(start, end)
        self.pending_marks.clear()
        self.refresh_format_state()

    def toggle_pending_mark(self, mark: str) -> None:
        """Arm or disarm a mark for the next text typed at a collapsed caret."""
        active = getattr(self.format_state, mark)
        self.pending_marks[mark] = not active
        self.refresh_format_state()

    def type_text(self, text: str) -> None:
        self.focus()
        doc, sel = self.document, self.selection
        if not sel.collapsed:
            doc = commands.delete_range(doc, sel.start, sel.end)

        marks = None
        if self.pending_marks:
            index, offset = doc.locate(sel.start)
            neighbour = commands.caret_format(doc.blocks[index], offset)
            current = set(neighbour.marks) if neighbour else set()
            for mark, on in self.pending_marks.items():
                if on:
                    current.add(mark)
                else:
                    current.discard(mark)
            marks = frozenset(current)

        doc, pos = commands.insert_text(doc, sel.start, text, marks=marks)
        self.pending_marks.clear()
        self.commit(doc, Selection(pos))

    def delete_backward(self) -> None:
        self.focus()
        doc, pos = commands.delete_backward(self.document, self.selection)
        self.commit(doc, Selection(pos))

    def commit(self, document: Document, selection: Selection) -> None:
        """Install a transformed tree and emit the value it serializes to."""
        self.document = document
        length = document.length
        self.selection = Selection(min(selection.start, length), min(selection.end, length))
        markup = document.to_html()
        if is_empty(markup):
            self.show_placeholder = True
            self._emit("")
        else:
            self._emit(canonicalize(markup))
        self.refresh_format_state()

    def _emit(self, value: str) -> None:
        self._value = value
        if self.on_change is not None:
            self.on_change(value)

    # -- derived state -----------------------------------------------------

    def refresh_format_state(self) -> FormatState:
        self._format_state = commands.format_state(
            self.document, self.selection, self.pending_marks
        )
        return self._format_state

    @property
    def format_state(self) -> FormatState:
        return self._format_state

    @property
    def selected_text(self) -> str:
        return self.document.text[self.selection.start:self.selection.end]

    @property
    def character_count(self) -> int:
        return sum(block.length for block in self.document.blocks)

    @property
    def is_over_limit(self) -> bool:
        return self.character_count > self.options.character_limit


class FormatCommandController:
    """Routes every edit through tree transforms and the canonical pipeline."""

    def __init__(self, surface: EditableSurface, prompt: Prompt | None = None):
        self.surface = surface
        self.prompt = prompt

    def apply_format(self, command: str) -> None:
        if command not in SUPPORTED_COMMANDS:
            raise UnsupportedCommandError(f"Unsupported format command: {command}")

        surface = self.surface
        surface.focus()
        selection = surface.selection

        if command == "createLink":
            self._create_link()
        elif command == "insertUnorderedList":
            surface.commit(commands.toggle_bullet_list(surface.document, selection), selection)
        elif selection.collapsed:
            surface.toggle_pending_mark(COMMAND_MARKS[command])
        else:
            doc = commands.toggle_mark(surface.document, selection, COMMAND_MARKS[command])
            surface.commit(doc, selection)

    def _create_link(self) -> None:
        surface = self.surface
        selection = surface.selection

        url = self._ask("Enter URL:", "https://")
        if not url:
            logger.debug("Link prompt dismissed")
            return
        href = normalize_href(url)

        if not selection.collapsed:
            surface.commit(commands.set_link(surface.document, selection, href), selection)
            return

        text = self._ask("Enter link text:", "Link") or "Link"
        doc = surface.document
        index, offset = doc.locate(selection.start)
        neighbour = commands.caret_format(doc.blocks[index], offset)
        marks = neighbour.marks if neighbour else frozenset()
        doc, pos = commands.insert_text(doc, selection.start, text, marks=marks, href=href)
        surface.commit(doc, Selection(pos))

    def _ask(self, message: str, default: str) -> str | None:
        if self.prompt is None:
            return None
        return self.prompt(message, default)

    def handle_key(self, event: KeyEvent) -> bool:
        """Handle a keystroke; returns False for keys left to the host."""
        surface = self.surface

        if (event.ctrl or event.meta) and not event.shift:
            command = _SHORTCUTS.get(event.key.lower())
            if command is None:
                return False
            event.prevent_default()
            self.apply_format(command)
            return True

        if event.key == "Enter":
            event.prevent_default()
            surface.focus()
            if event.shift:
                doc, pos = commands.insert_line_break(surface.document, surface.selection)
            else:
                doc, pos = self._enter(surface.document, surface.selection)
            surface.commit(doc, Selection(pos))
            return True

        if event.key == "Backspace":
            event.prevent_default()
            surface.delete_backward()
            return True

        if len(event.key) == 1 and not (event.ctrl or event.meta or event.alt):
            event.prevent_default()
            surface.type_text(event.key)
            return True

        return False

    @staticmethod
    def _enter(doc: Document, selection: Selection) -> tuple[Document, int]:
        if not selection.collapsed:
            doc = commands.delete_range(doc, selection.start, selection.end)
        pos = selection.start
        index, _ = doc.locate(pos)
        block = doc.blocks[index]
        if block.list_item and not block.text.strip():
            return commands.outdent_item(doc, index), pos
        return commands.split_block(doc, pos)

    def handle_paste(self, clipboard: ClipboardData) -> None:
        """Insert only the plain-text flavour of the clipboard."""
        clipboard.prevent_default()
        text = clipboard.get_data("text/plain")
        if text:
            self.surface.type_text(text)

    def insert_suggestion(self, text: str | list[str], kind: SuggestionKind) -> None:
        surface = self.surface
        if kind == "skills":
            current = surface.document.text.strip()
            combined = append_skills(current, text)
            surface.focus()
            doc = Document.from_html(html.escape(combined))
            surface.commit(doc, Selection(doc.length))
            return
        if kind not in ("summary", "description"):
            raise ValueError(f"Unknown suggestion kind: {kind}")

        if isinstance(text, (list, tuple)):
            text = "\n".join(text)
        markup = canonicalize(suggestion_to_markup(text))
        if not markup:
            return

        surface.focus()
        selection = surface.selection
        doc = surface.document
        if not selection.collapsed:
            doc = commands.delete_range(doc, selection.start, selection.end)
        doc, pos = commands.insert_fragment(doc, selection.start, Document.from_html(markup))
        surface.commit(doc, Selection(pos))
