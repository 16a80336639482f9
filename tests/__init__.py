#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run without external services:

    # Run all tests
    python -m pytest tests/ -v

    # Run only tests that do not touch a database
    python -m pytest tests/ -v -m "not db"

Database tests use in-memory SQLite through the same SQLAlchemy models
used in production. The reasoning service is always mocked.
"""
