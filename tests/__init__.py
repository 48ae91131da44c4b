"""
Unit Tests for Stockfish Client

This package contains unit tests for all client components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_driver.py

    # Run with coverage
    pytest tests/ --cov=stockfish_client --cov-report=html

Most tests run against the bundled reference engine
(`python -m stockfish_client.uci`); tests that need a real Stockfish binary
skip when none is installed.

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
