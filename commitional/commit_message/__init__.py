"""Commit message model: parsing, editing, rendering and rule processing."""

from .footer import BREAKING_CHANGE_TOKENS, CommitMessageFooter, InvalidFooterError
from .header import BREAKING_EMOJI, CommitMessageHeader
from .message import CommitMessage

__all__ = [
    'BREAKING_CHANGE_TOKENS',
    'BREAKING_EMOJI',
    'CommitMessage',
    'CommitMessageFooter',
    'CommitMessageHeader',
    'InvalidFooterError',
]
