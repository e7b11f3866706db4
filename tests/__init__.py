"""fieldplan Test Suite.

Test organization mirrors the fieldplan/ package:
    tests/
    ├── conftest.py          # Shared fixtures
    ├── test_core/           # Config, logging, exceptions
    ├── test_data/           # Models, import normalization, session
    ├── test_engine/         # Reconcile, scoring, planner, stats, export
    ├── test_integrations/   # File reading, geocoding
    ├── test_content/        # Daily brief rendering
    └── test_cli.py          # Command line entry point
"""
