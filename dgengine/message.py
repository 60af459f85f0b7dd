"""Engine messages: identifiers, categories, flags and the message types."""

from __future__ import annotations

import copy
import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import ClassVar

from dgengine.input_codes import InputCode, InputEvent, input_code_name, input_event_name

ID_SHIFT = 20

_id_lock = threading.Lock()
_id_counter = itertools.count(1)


class MessageCategory(IntEnum):
    """Top-level grouping of messages; client categories start at CLIENT_BEGIN."""

    NONE = 0
    GUI = 1
    INPUT = 2
    WINDOW = 3
    CLIENT_BEGIN = 4


class MessageFlag(IntFlag):
    HANDLED = 1 << 0
    SHOW = 1 << 1


@dataclass
class Message:
    """Base of all messages.

    Each concrete message type gets a unique id the first time it is asked
    for; the id carries the type's category in its high bits.
    """

    CATEGORY: ClassVar[MessageCategory] = MessageCategory.NONE
    NAME: ClassVar[str] = ""

    flags: MessageFlag = field(default=MessageFlag(0), kw_only=True, repr=False, compare=False)

    @classmethod
    def static_id(cls) -> int:
        """Return the id of this message type, assigning it on first use."""
        if cls is Message:
            raise TypeError("the base Message type has no id")
        ident = cls.__dict__.get("_type_id")
        if ident is None:
            with _id_lock:
                ident = cls.__dict__.get("_type_id")
                if ident is None:
                    ident = (int(cls.CATEGORY) << ID_SHIFT) | next(_id_counter)
                    cls._type_id = ident
        return ident

    def query_flag(self, flag: MessageFlag) -> bool:
        return bool(self.flags & flag)

    def set_flag(self, flag: MessageFlag, on: bool) -> None:
        if on:
            self.flags |= flag
        else:
            self.flags &= ~flag

    def category(self) -> int:
        """Return the category encoded in this message's type id."""
        return self.static_id() >> ID_SHIFT

    def clone(self) -> Message:
        """Return an independent copy of this message, flags included."""
        return copy.copy(self)

    def __str__(self) -> str:
        return self.NAME


@dataclass
class NoneMessage(Message):
    NAME: ClassVar[str] = "None"


@dataclass
class GuiGoBack(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_GoBack"


@dataclass
class GuiUp(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_Up"


@dataclass
class GuiDown(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_Down"


@dataclass
class GuiLeft(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_Left"


@dataclass
class GuiRight(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_Right"


@dataclass
class GuiSelect(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_Select"


@dataclass
class GuiPointerDown(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_PointerDown"

    context: int = 0
    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"GUI_PointerDown [context: {self.context}, x: {self.x}, y: {self.y}]"


@dataclass
class GuiPointerUp(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_PointerUp"

    context: int = 0
    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"GUI_PointerUp [context: {self.context}, x: {self.x}, y: {self.y}]"


@dataclass
class GuiPointerMove(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_PointerMove"

    x: int = 0
    y: int = 0

    def consume_hover(self) -> None:
        """Move the pointer off-screen so no later widget reacts to hovering."""
        self.x = -1
        self.y = -1

    def __str__(self) -> str:
        return f"GUI_PointerMov [x: {self.x}, y: {self.y}]"


@dataclass
class GuiText(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.GUI
    NAME: ClassVar[str] = "GUI_Text"

    text: str = ""


@dataclass
class WindowShown(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Shown"


@dataclass
class WindowHidden(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Hidden"


@dataclass
class WindowExposed(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Exposed"


@dataclass
class WindowMoved(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Moved"

    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"Window_Moved [x: {self.x}, y: {self.y}]"


@dataclass
class WindowResized(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Resized"

    w: int = 0
    h: int = 0

    def __str__(self) -> str:
        return f"Window_Resized [w: {self.w}, h: {self.h}]"


@dataclass
class WindowMinimized(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Minimized"


@dataclass
class WindowMaximized(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Maximized"


@dataclass
class WindowRestored(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Restored"


@dataclass
class WindowEnter(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Enter"


@dataclass
class WindowLeave(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Leave"


@dataclass
class WindowFocusGained(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Focus_Gained"


@dataclass
class WindowFocusLost(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Focus_Lost"


@dataclass
class Quit(Message):
    NAME: ClassVar[str] = "Quit"


@dataclass
class WindowTakeFocus(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.WINDOW
    NAME: ClassVar[str] = "Window_Take_Focus"


@dataclass
class InputKey(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.INPUT
    NAME: ClassVar[str] = "Input_Key"

    code: int = InputCode.UNKNOWN
    event: int = InputEvent.VALUE_CHANGE
    mod_state: int = 0

    def __str__(self) -> str:
        return (
            f"Input_KeyUp [code: {input_code_name(self.code)}, "
            f"event: {input_event_name(self.event)}, mod state {int(self.mod_state)}]"
        )


@dataclass
class InputText(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.INPUT
    NAME: ClassVar[str] = "Input_Text"

    text: str = ""

    def __str__(self) -> str:
        return f"Input_Text [text: {self.text}]"


@dataclass
class InputMouse(Message):
    CATEGORY: ClassVar[MessageCategory] = MessageCategory.INPUT
    NAME: ClassVar[str] = "Input_Mouse"

    code: int = InputCode.UNKNOWN
    event: int = InputEvent.VALUE_CHANGE
    mod_state: int = 0
    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return (
            f"Input_KeyUp [code: {input_code_name(self.code)}, "
            f"event: {input_event_name(self.event)}, mod state {int(self.mod_state)}"
            f", x:{self.x}, y:{self.y}]"
        )


@dataclass
class MessageCommand(Message):
    """A message carrying a callable to be run by whoever handles it."""

    NAME: ClassVar[str] = "Message_Command"

    command: Callable[[], object] | None = None

    def run(self) -> None:
        """Call the carried callable, if there is one."""
        if self.command is not None:
            self.command()

    def __str__(self) -> str:
        return f"Message_Command [ptr: {self.command!r}]"