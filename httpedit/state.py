from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from requests.structures import CaseInsensitiveDict

from .editor import EditorBuffer, ResponseView, SelectionTracker
from .layout import PaneLayout


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"

    @property
    def is_visual(self) -> bool:
        return self in (Mode.VISUAL, Mode.VISUAL_LINE)


MODE_LABELS: dict[Mode, str] = {
    Mode.INSERT: "-- INSERT --",
    Mode.VISUAL: "-- VISUAL --",
    Mode.VISUAL_LINE: "-- VISUAL LINE --",
}


class Pane(Enum):
    REQUEST = "request"
    RESPONSE = "response"


@dataclass
class ReplSession:
    buffer: EditorBuffer = field(default_factory=EditorBuffer)
    layout: PaneLayout = field(default_factory=PaneLayout)
    mode: Mode = Mode.INSERT
    current_pane: Pane = Pane.REQUEST
    response: ResponseView | None = None
    selection: SelectionTracker | None = None
    session_headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    verbose: bool = False
    clipboard: str = ""
    command_buffer: str = ""
    status_message: str = MODE_LABELS[Mode.INSERT]
    pending_g: bool = False
    pending_d: bool = False
    pending_ctrl_w: bool = False
    last_response_status: str | None = None
    last_request_duration_ms: int | None = None

    @property
    def has_response(self) -> bool:
        return self.response is not None
