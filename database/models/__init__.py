from .base import Base
from .match import CandidateJobMatch

__all__ = [
    'Base',
    'CandidateJobMatch',
]
