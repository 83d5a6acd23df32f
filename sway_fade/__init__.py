"""
Sway Fade

Fade windows and workspaces in and out in Sway by driving its IPC socket
with a timed sequence of opacity commands.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"
