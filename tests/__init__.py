"""
campusnav Test Suite
====================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/           → Tests for campusnav.core (config, models, errors, logging)
    ├── test_infrastructure/ → Tests for campusnav.infrastructure (document store, record stores)
    ├── test_directory/      → Tests for campusnav.directory (load and read-time join)
    ├── test_api/            → Tests for campusnav.api (HTTP contract, lifespan)
    ├── test_service.py      → DirectoryService lifecycle and locking
    ├── test_bootstrap.py    → Payload loading and startup
    └── conftest.py          → Shared pytest fixtures

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_directory/    # Run only directory tests
"""
