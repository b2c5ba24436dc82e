"""
ACCS Scoring Engine

Authenticity, audience trust, promotion saturation and fatigue models,
and the synthesizer that blends them into one score.
"""

from .data_adapter import prepare_accs_inputs
from .synthesizer import BatchResult, compute_accs, score_batch

__all__ = ['compute_accs', 'score_batch', 'BatchResult', 'prepare_accs_inputs']
