"""
Workgroups Support Utilities (wgutil)

Generic control-flow, sequence, alist, record and persistence helpers
consumed by the session-management layer of an editor extension.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Workgroup / window-configuration semantics
    - How sessions are laid out on screen
    - The host editor's real buffer, frame or keymap objects

The host is reached only through the interface in `wgutil.host`.
Everything else is plain data in, plain data out.
"""

__version__ = "0.1.0"
