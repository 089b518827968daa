"""Credential sink adapters."""

from .base import BaseCredentialSink
from .profile_file import ProfileFileCredentialSink
from .shell import ShellCredentialSink

__all__ = ["BaseCredentialSink", "ProfileFileCredentialSink", "ShellCredentialSink"]
