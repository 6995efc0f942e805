"""
Host Wrappers — thin accessors over the host editor's buffers, frames,
keymaps and hooks.

The session layer never touches editor objects directly. It goes through
a `HostEditor` implementation and the helper functions below.
`MemoryHost` is a complete in-memory host used by tools and tests.

ARCHITECTURAL RULE:
    Nothing in this module depends on the rest of the session layer.
    Buffer lookup failures raise NotFoundError; everything else that can
    be absent returns None.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, MutableMapping, Optional, Pattern, Sequence, Union

from wgutil.errors import NotFoundError
from wgutil.sequences import IDENTITY_MATCH, cyclic_nth_from, partition


RESERVED_BUFFER_PREFIX = " "


@dataclass
class Buffer:
    """
    A host buffer as seen by the session layer.

    Properties:
        name: Unique buffer name
        file_path: Visited file, or None for non-file buffers
        major_mode: Name of the buffer's major mode
    """

    name: str
    file_path: Optional[str] = None
    major_mode: str = "fundamental-mode"


@dataclass(eq=False)
class Frame:
    """A host frame. Frames compare by identity."""

    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)


class HookRegistry:
    """
    Named hook lists.

    Like the host's own hooks, `add` prepends unless `append=True`, and
    adding a function already present is a no-op.
    """

    def __init__(self):
        self._hooks: Dict[str, List[Callable[..., Any]]] = {}

    def add(self, hook: str, function: Callable[..., Any], append: bool = False) -> None:
        functions = self._hooks.setdefault(hook, [])
        if function in functions:
            return
        if append:
            functions.append(function)
        else:
            functions.insert(0, function)

    def remove(self, hook: str, function: Callable[..., Any]) -> None:
        functions = self._hooks.get(hook, [])
        if function in functions:
            functions.remove(function)

    def functions(self, hook: str) -> List[Callable[..., Any]]:
        return list(self._hooks.get(hook, []))

    def run(self, hook: str, *args: Any) -> None:
        for function in self.functions(hook):
            function(*args)


class HostEditor(ABC):
    """
    What the session layer needs from the editor.

    Implementations return live lists in the host's own order: the most
    recently selected buffer first, frames in creation order.
    """

    def __init__(self):
        self.hooks = HookRegistry()

    @abstractmethod
    def buffer_list(self) -> List[Buffer]:
        ...

    @abstractmethod
    def frame_list(self) -> List[Frame]:
        ...

    @abstractmethod
    def selected_frame(self) -> Frame:
        ...


class MemoryHost(HostEditor):
    """In-memory host holding plain Buffer and Frame objects."""

    def __init__(self, buffers: Optional[Sequence[Buffer]] = None, frames: Optional[Sequence[Frame]] = None):
        super().__init__()
        self.buffers: List[Buffer] = list(buffers or [])
        self.frames: List[Frame] = list(frames or [Frame("F1")])
        self.selected = self.frames[0]

    def buffer_list(self) -> List[Buffer]:
        return list(self.buffers)

    def frame_list(self) -> List[Frame]:
        return list(self.frames)

    def selected_frame(self) -> Frame:
        return self.selected

    def select_frame(self, frame: Frame) -> None:
        if not any(frame is f for f in self.frames):
            raise NotFoundError(f"Frame not live: {frame.name}")
        self.selected = frame


BufferOrName = Union[Buffer, str]


def get_buffer(host: HostEditor, buffer_or_name: BufferOrName) -> Buffer:
    """
    Return the live buffer named by `buffer_or_name`.

    Raises:
        NotFoundError: If no live buffer matches
    """
    if isinstance(buffer_or_name, Buffer):
        for buffer in host.buffer_list():
            if buffer is buffer_or_name:
                return buffer
        raise NotFoundError(f"Buffer not live: {buffer_or_name.name}")
    for buffer in host.buffer_list():
        if buffer.name == buffer_or_name:
            return buffer
    raise NotFoundError(f"No buffer named {buffer_or_name!r}")


def buffer_name(host: HostEditor, buffer_or_name: BufferOrName) -> str:
    return get_buffer(host, buffer_or_name).name


def buffer_file_path(host: HostEditor, buffer_or_name: BufferOrName) -> Optional[str]:
    return get_buffer(host, buffer_or_name).file_path


def buffer_major_mode(host: HostEditor, buffer_or_name: BufferOrName) -> str:
    return get_buffer(host, buffer_or_name).major_mode


def interesting_buffers(host: HostEditor) -> List[Buffer]:
    """Live buffers, minus internal ones whose names start with a space."""
    return [b for b in host.buffer_list() if not b.name.startswith(RESERVED_BUFFER_PREFIX)]


def find_buffer_matching(
    host: HostEditor,
    pattern: Union[str, Pattern[str]],
    buffers: Optional[Sequence[Buffer]] = None,
) -> Optional[Buffer]:
    """First buffer whose name contains a match for `pattern`, or None."""
    if buffers is None:
        buffers = host.buffer_list()
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    for buffer in buffers:
        if regex.search(buffer.name):
            return buffer
    return None


def cyclic_nth_frame(host: HostEditor, n: int = 1, frame: Optional[Frame] = None) -> Frame:
    """
    The frame `n` places after `frame` (default: the selected frame),
    wrapping around the frame list.

    Raises:
        NotFoundError: If `frame` is not a live frame
    """
    if frame is None:
        frame = host.selected_frame()
    result = cyclic_nth_from(frame, host.frame_list(), n, match=IDENTITY_MATCH)
    if result is None:
        raise NotFoundError(f"Frame not live: {frame.name}")
    return result


def fill_keymap(keymap: MutableMapping[str, Any], *keys_and_commands: Any) -> MutableMapping[str, Any]:
    """
    Bind interleaved key/command arguments in `keymap` and return it.

        fill_keymap(keymap, "C-c s", save_session, "C-c f", find_session)
    """
    if len(keys_and_commands) % 2:
        raise ValueError("fill_keymap needs an even number of arguments")
    for key, command in partition(keys_and_commands, 2):
        keymap[key] = command
    return keymap


def add_or_remove_hooks(hooks: HookRegistry, remove: bool, *hooks_and_functions: Any) -> None:
    """
    Add (or, when `remove` is true, remove) each function on its hook.

        add_or_remove_hooks(host.hooks, False,
                            "kill-emacs-hook", save_on_exit,
                            "delete-frame-functions", forget_frame)
    """
    if len(hooks_and_functions) % 2:
        raise ValueError("add_or_remove_hooks needs an even number of arguments")
    for hook, function in partition(hooks_and_functions, 2):
        if remove:
            hooks.remove(hook, function)
        else:
            hooks.add(hook, function)


__all__ = [
    "RESERVED_BUFFER_PREFIX",
    "Buffer",
    "Frame",
    "HookRegistry",
    "HostEditor",
    "MemoryHost",
    "get_buffer",
    "buffer_name",
    "buffer_file_path",
    "buffer_major_mode",
    "interesting_buffers",
    "find_buffer_matching",
    "cyclic_nth_frame",
    "fill_keymap",
    "add_or_remove_hooks",
]
