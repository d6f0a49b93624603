"""Status and history widgets for the fire alert display."""

from typing import Optional, Tuple

from rich.console import RenderableType
from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from ...models.evaluation import SensorStatuses


LOADING_TEXT = "Loading..."


class SensorStatusWidget(Widget):
    """Three status lines: fire, smoke and temperature."""

    DEFAULT_CSS = """
    SensorStatusWidget {
        height: auto;
        content-align: center middle;
        text-align: center;
        text-style: bold;
        padding: 1 0;
    }
    """

    statuses: reactive[Optional[SensorStatuses]] = reactive(None)
    fire_detected: reactive[bool] = reactive(False)

    def render(self) -> RenderableType:
        """Render status lines, or a loading placeholder before the first snapshot."""
        if self.statuses is None:
            lines = [LOADING_TEXT, LOADING_TEXT, LOADING_TEXT]
        else:
            lines = self.statuses.as_lines()

        text = Text(justify="center")
        for index, line in enumerate(lines):
            style = "bold red" if index == 0 and self.fire_detected else ""
            text.append(line, style=style)
            if index < len(lines) - 1:
                text.append("\n\n")
        return text


class HistoryLogWidget(Widget):
    """Most recent history entries, newest first."""

    DEFAULT_CSS = """
    HistoryLogWidget {
        height: 12;
        border: solid $secondary;
        padding: 0 1;
        overflow-y: auto;
    }
    """

    entries: reactive[Tuple[str, ...]] = reactive(tuple)

    def render(self) -> RenderableType:
        if not self.entries:
            return Text("No readings yet", style="dim")
        return Text("\n".join(self.entries))
