"""
Application controllers for managing interactions between UI and core logic.
"""
from .interaction_controller import Bounds, DragState, InteractionController

__all__ = [
    'Bounds',
    'DragState',
    'InteractionController',
]
