"""
Shared Rich Console for diagnostic output.

Warnings about configuration problems (an unreadable config file, an invalid
setting value) are printed through this one instance rather than through each
module's own Console. It writes to stderr so diagnostics never end up inside
the colored output a caller is producing on stdout.

Tests can patch `advconsole.console.console` (or the name imported into a
module) in one place to capture or silence these messages.

Usage:
    from .console import console
    console.print("[yellow]Warning: ...[/yellow]")
"""

from rich.console import Console

# Diagnostics only. Payload output goes through a TerminalBackend, never here.
console = Console(stderr=True)
