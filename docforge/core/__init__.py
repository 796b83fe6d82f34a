"""
Core layer for DocForge.

Shared services used by every other package:

    core/
    ├── config/            # Config dataclasses
    ├── config_loaders.py  # load_config(), env overrides
    ├── exceptions.py      # DocForgeError hierarchy
    └── logging.py         # StructuredLogger, PublishLogger

Import from the submodules directly; this package does not re-export them
so that importing a single module stays cheap.
"""
