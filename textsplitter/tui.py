"""Interactive terminal UI.

The UI is a small state machine with two states, capturing text and viewing
parts. ``update`` is a pure transition function over an immutable ``Model``;
``view`` renders a model with an explicit ``Theme``; ``run_tui`` drives the loop
by turning each line typed at the prompt into events.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, TextIO, Tuple, Union

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from textsplitter.chunking import TextChunker, split_text

logger = logging.getLogger(__name__)

INPUT_PREVIEW_CHARS = 500
PLACEHOLDER = (
    "Paste your large text here...\n\n"
    "Tip: Most terminals handle paste automatically.\n"
    "Just copy your text and paste it here!"
)


class State(enum.Enum):
    CAPTURING = "capturing"
    VIEWING = "viewing"


# Events
@dataclass(frozen=True)
class TextInput:
    text: str


@dataclass(frozen=True)
class DeleteLast:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class Toggle:
    pass


@dataclass(frozen=True)
class AdjustSize:
    direction: int  # +1 grows the chunk size by one step, -1 shrinks it


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Navigate:
    offset: int


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Quit:
    pass


Event = Union[TextInput, DeleteLast, Submit, Toggle, AdjustSize, Reset, Navigate, Resize, Quit]


@dataclass(frozen=True)
class SizeLimits:
    minimum: int = 500
    maximum: int = 8000
    step: int = 500


@dataclass(frozen=True)
class Model:
    chunk_size: int
    input_text: str = ""
    chunks: Tuple[str, ...] = ()
    state: State = State.CAPTURING
    page: int = 0
    width: int = 80
    height: int = 24
    quitting: bool = False


@dataclass(frozen=True)
class Theme:
    title: str = "bold #7C3AED"
    input_border: str = "#7C3AED"
    chunk_border: str = "#059669"
    chunk_header: str = "bold #059669 on #F0FDF4"
    button: str = "#FFFFFF on #7C3AED"
    active_button: str = "bold #FFFFFF on #A855F7"
    help: str = "#6B7280"
    separator: str = "bold #D1D5DB"
    instruction: str = "#059669 on #F0FDF4"


def initial_model(chunk_size: int, text: str = "") -> Model:
    """Build the starting model; pre-supplied text opens straight into the results."""
    text = text.strip()
    model = Model(chunk_size=chunk_size, input_text=text)
    if text:
        chunks = tuple(split_text(text, chunk_size))
        if chunks:
            model = replace(model, chunks=chunks, state=State.VIEWING)
    return model


def _clamp_page(page: int, chunks: Tuple[str, ...]) -> int:
    if not chunks:
        return 0
    return max(0, min(page, len(chunks) - 1))


def update(model: Model, event: Event, limits: SizeLimits = SizeLimits()) -> Model:
    """Return the model that results from applying ``event`` to ``model``."""
    if isinstance(event, Quit):
        return replace(model, quitting=True)

    if isinstance(event, Resize):
        return replace(model, width=event.width, height=event.height)

    if isinstance(event, Reset):
        return replace(model, input_text="", chunks=(), state=State.CAPTURING, page=0)

    if isinstance(event, AdjustSize):
        # steps are allowed while the current size is inside the bounds
        if event.direction > 0 and model.chunk_size >= limits.maximum:
            return model
        if event.direction < 0 and model.chunk_size <= limits.minimum:
            return model
        new_size = model.chunk_size + event.direction * limits.step
        if new_size <= 0:
            return model
        chunks = model.chunks
        if model.input_text:
            chunks = tuple(split_text(model.input_text, new_size))
        return replace(model, chunk_size=new_size, chunks=chunks, page=_clamp_page(model.page, chunks))

    if isinstance(event, Toggle):
        if model.state is State.CAPTURING and model.chunks:
            return replace(model, state=State.VIEWING)
        if model.state is State.VIEWING:
            return replace(model, state=State.CAPTURING)
        return model

    if model.state is State.CAPTURING:
        if isinstance(event, TextInput):
            return replace(model, input_text=model.input_text + event.text)
        if isinstance(event, DeleteLast):
            return replace(model, input_text=model.input_text[:-1])
        if isinstance(event, Submit):
            chunks = tuple(split_text(model.input_text, model.chunk_size))
            if not chunks:
                return replace(model, chunks=())
            return replace(model, chunks=chunks, state=State.VIEWING, page=0)
        return model

    if isinstance(event, Navigate):
        return replace(model, page=_clamp_page(model.page + event.offset, model.chunks))
    return model


def _render_capture(model: Model, theme: Theme, panel_width: int) -> List[RenderableType]:
    content: List[RenderableType] = [Text("📝 Paste your text here, then press ENTER on two empty lines:")]

    display = model.input_text or PLACEHOLDER
    if len(display) > INPUT_PREVIEW_CHARS:
        display = display[: INPUT_PREVIEW_CHARS - 3] + "..."
    content.append(Panel(Text(display), border_style=theme.input_border, width=panel_width, height=10, padding=1))

    char_count = f"Characters: {len(model.input_text)}"
    if model.input_text:
        estimated = TextChunker(model.chunk_size).estimate_chunks(model.input_text)
        char_count += f" | Estimated chunks: {estimated}"
    content.append(Text(char_count, style=theme.help))

    if model.input_text:
        content.append(Text(" Press ENTER to Split ", style=theme.active_button))
    else:
        content.append(Text(" Paste text first, then press ENTER ", style=theme.button))
    return content


def _render_results(model: Model, theme: Theme, panel_width: int) -> List[RenderableType]:
    if not model.chunks:
        return [Text("No chunks available")]

    total = len(model.chunks)
    chunk = model.chunks[model.page]
    content: List[RenderableType] = [
        Text("💡 Select and copy the part below, then move to the next one", style=theme.instruction),
        Text(f"📊 Split into {total} chunks | Total: {len(model.input_text)} characters", style=theme.chunk_header),
        Text(f"📄 PART {model.page + 1}/{total} ({len(chunk)} characters)", style=theme.chunk_header),
        Panel(Text(chunk), border_style=theme.chunk_border, width=panel_width, padding=1),
        Rule(style=theme.separator),
        Text(f"Page {model.page + 1} of {total}", style=theme.help),
    ]
    if model.page == total - 1:
        content.append(
            Text("💾 Paste each part into your chat with context like: 'This is part X/Y...'", style=theme.instruction)
        )
    return content


def _render_help(model: Model, theme: Theme) -> Text:
    if model.state is State.CAPTURING:
        lines = [
            "📋 Paste text and press ENTER twice to split (or /split)",
            "🔄 /reset | /up /down adjust chunk size | /undo removes last character",
            "❌ /quit or Ctrl+C to quit",
        ]
    else:
        lines = [
            "📄 n/p next and previous part",
            "🔄 b back to input | r reset | +/- adjust size",
            "❌ q or Ctrl+C to quit",
        ]
    return Text(" | ".join(lines), style=theme.help)


def view(model: Model, theme: Theme = Theme()) -> RenderableType:
    """Render the whole screen for ``model``."""
    panel_width = max(20, min(model.width, 80))
    sections: List[RenderableType] = [
        Text("📝 Text Splitter", style=theme.title),
        Text(f"Chunk Size: {model.chunk_size} characters (up/down to adjust)", style=theme.help),
    ]
    if model.state is State.CAPTURING:
        sections.extend(_render_capture(model, theme, panel_width))
    else:
        sections.extend(_render_results(model, theme, panel_width))
    sections.append(_render_help(model, theme))
    return Group(*sections)


CAPTURE_COMMANDS = {
    "/split": Submit,
    "/view": Toggle,
    "/up": lambda: AdjustSize(1),
    "/down": lambda: AdjustSize(-1),
    "/reset": Reset,
    "/undo": DeleteLast,
    "/quit": Quit,
}

VIEW_COMMANDS = {
    "": lambda: Navigate(1),
    "n": lambda: Navigate(1),
    "next": lambda: Navigate(1),
    "p": lambda: Navigate(-1),
    "prev": lambda: Navigate(-1),
    "+": lambda: AdjustSize(1),
    "up": lambda: AdjustSize(1),
    "-": lambda: AdjustSize(-1),
    "down": lambda: AdjustSize(-1),
    "r": Reset,
    "reset": Reset,
    "b": Toggle,
    "back": Toggle,
    "tab": Toggle,
    "q": Quit,
    "quit": Quit,
}


def parse_line(line: str, model: Model) -> List[Event]:
    """Translate one line of terminal input into events for the current state."""
    if model.state is State.CAPTURING:
        command = line.strip()
        if command.startswith("/"):
            factory = CAPTURE_COMMANDS.get(command.lower())
            if factory is None:
                # not a command, e.g. a path or a comment line; keep it as text
                return [TextInput(line + "\n")]
            return [factory()]
        # a second empty line in a row ends the paste
        if not line and model.input_text.endswith("\n\n"):
            return [Submit()]
        return [TextInput(line + "\n")]

    command = line.strip().lower().lstrip("/")
    factory = VIEW_COMMANDS.get(command)
    if factory is None:
        logger.debug("Ignoring unknown command %r", command)
        return []
    return [factory()]


@dataclass
class TerminalSession:
    """Wires a console and an input stream to the update/view loop."""

    console: Console
    limits: SizeLimits = field(default_factory=SizeLimits)
    theme: Theme = field(default_factory=Theme)
    stream: Optional[TextIO] = None

    def read_events(self, model: Model) -> Iterable[Event]:
        prompt = "> " if model.state is State.CAPTURING else "(n/p/+/-/b/r/q) > "
        try:
            line = self.read_line(prompt)
        except (EOFError, KeyboardInterrupt):
            return [Quit()]
        return parse_line(line, model)

    def read_line(self, prompt: str) -> str:
        if self.stream is None:
            return self.console.input(prompt)
        # Reading from an explicit stream returns "" at end of input instead of raising
        line = self.console.input(prompt, stream=self.stream)
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def run(self, model: Model) -> Model:
        while not model.quitting:
            width, height = self.console.size
            if (width, height) != (model.width, model.height):
                model = update(model, Resize(width, height), self.limits)
            self.console.clear()
            self.console.print(view(model, self.theme))
            for event in self.read_events(model):
                model = update(model, event, self.limits)
        logger.info("Leaving terminal UI with %d chunks", len(model.chunks))
        return model


def run_tui(
    chunk_size: int,
    initial_text: str = "",
    *,
    limits: SizeLimits = SizeLimits(),
    console: Optional[Console] = None,
    stream: Optional[TextIO] = None,
) -> Model:
    """Start the interactive UI and block until the user quits."""
    session = TerminalSession(console=console or Console(), limits=limits, stream=stream)
    return session.run(initial_model(chunk_size, initial_text))
