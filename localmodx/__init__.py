"""Local MODX site scaffolding.

Submodules:
- utils: logging, status lines and subprocess helpers
- git: clone/pull helpers
- modx: prompts, archive, templates and installer steps
"""

__version__ = "0.3.0"
