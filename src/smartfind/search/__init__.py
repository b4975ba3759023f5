"""
Search pipeline for smart-find.

Instant patterns, AI command synthesis, dual-strategy orchestration,
merge-and-rank and the dispatcher that ties them together.
"""

from .dispatcher import Dispatcher, InvalidInputError
from .orchestrator import DualStrategyOrchestrator, OrchestrationResult
from .patterns import classify, apply_rules
from .ranker import MergeRankEngine
from .synthesizer import CommandSynthesizer

__all__ = [
    'Dispatcher',
    'InvalidInputError',
    'DualStrategyOrchestrator',
    'OrchestrationResult',
    'classify',
    'apply_rules',
    'MergeRankEngine',
    'CommandSynthesizer',
]
