"""
Interaction Use Cases
"""

from .record_interaction_use_case import (
    RecordInteractionResponse,
    RecordInteractionUseCase,
)

__all__ = ["RecordInteractionUseCase", "RecordInteractionResponse"]
