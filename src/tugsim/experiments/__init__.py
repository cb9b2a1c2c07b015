"""
Experiment harness: run matches without a renderer.

- Scripted human policies (always, never, rhythmic pulling)
- Headless single matches and back-to-back series
"""

from tugsim.experiments.policies import HumanPolicy, RhythmPolicy, always_pull, never_pull
from tugsim.experiments.runner import run_headless_match, run_series

__all__ = [
    "HumanPolicy",
    "RhythmPolicy",
    "always_pull",
    "never_pull",
    "run_headless_match",
    "run_series",
]
