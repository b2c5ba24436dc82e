"""
ACCS - Authenticity & Conversion Confidence Score engine

Predicts whether creator content will convert as a paid ad from its
transcript, caption, engagement and the creator's promotion history.
"""

__version__ = "0.1.0"

from .core.exceptions import InvalidInputError
from .core.models import ACCSInputs, ACCSScore, parse_inputs
from .scoring import compute_accs, score_batch

__all__ = [
    'ACCSInputs',
    'ACCSScore',
    'InvalidInputError',
    'compute_accs',
    'parse_inputs',
    'score_batch',
]
