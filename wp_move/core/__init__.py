"""Core functionality for wp-move"""

from .executor import Command, CommandExecutor
from .remote import RemoteCommandResolver
from .path_resolver import LocalPaths
from .dumper import find_dumper

__all__ = [
    "Command",
    "CommandExecutor",
    "RemoteCommandResolver",
    "LocalPaths",
    "find_dumper",
]
