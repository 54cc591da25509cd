"""ansimark - Build ANSI-colored text for chat clients."""

from .model import (
    Document,
    DocumentInvariantError,
    Segment,
    Selection,
    StyleChange,
    apply_style,
    check_document,
    clear,
    coalesce,
    reconcile_edit,
)
from .encoder import encode
from .session import EditingSession

__all__ = [
    'Document',
    'DocumentInvariantError',
    'Segment',
    'Selection',
    'StyleChange',
    'apply_style',
    'check_document',
    'clear',
    'coalesce',
    'reconcile_edit',
    'encode',
    'EditingSession',
]
