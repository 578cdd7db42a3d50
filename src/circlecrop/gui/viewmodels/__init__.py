from .signal import Signal, ObservableProperty
from .base import BaseViewModel
from .crop_viewmodel import CropEditorViewModel

__all__ = [
    "BaseViewModel",
    "CropEditorViewModel",
    "ObservableProperty",
    "Signal",
]
