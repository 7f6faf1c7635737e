# File: newshub/presentation/__init__.py
"""newshub.presentation: состояние окна статьи (reader/embed) и контроллер."""

from newshub.presentation.controller import PresentationController
from newshub.presentation.state import BLANK_FRAME, ModalState, ViewMode

__all__ = ["PresentationController", "ModalState", "ViewMode", "BLANK_FRAME"]
