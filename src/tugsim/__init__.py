"""
tugsim: Tug-of-Rope Physics and Opponent Simulator

A headless core for a two-player tug of rope game: a Verlet particle
rope between two pullers, one human and one AI.

Core concepts:
- The rope is a chain of point masses relaxed toward a rest length
- Pulling nudges the end particles; constraints drag the rest along
- The AI commits to pulling or resting for a reaction time, then re-decides
- The match is won when the rope midpoint crosses a threshold

Rendering and input capture live outside this package.
"""

__version__ = "0.1.0"
