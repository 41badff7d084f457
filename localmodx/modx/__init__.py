"""MODX scaffold package.

Submodules:
- site: destination-root layout and idempotency guards
- prompts: interactive answers with persisted defaults
- archive: download/unzip/rename of the MODX sources
- templates: build and setup config rendering
- installer: writing and install phases
"""

# Intentionally minimal; logic lives in submodules and __main__.
