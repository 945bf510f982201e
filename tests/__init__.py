"""
cloudhatch test suite
=====================

Test Modules
------------
- test_models.py: Tests for Pydantic configuration models
- test_fetcher.py: Tests for the precondition check and template fetch
- test_instantiator.py: Tests for placeholder substitution
- test_manifest.py: Tests for the package.json update
- test_installer.py: Tests for package-manager steps and the executor
- test_pipeline.py: End-to-end tests for the state machine
- test_cli.py: Tests for command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_instantiator.py

    # Run specific test class
    pytest tests/test_pipeline.py::TestFailures
"""
