"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed querybind package.
"""

import pytest


@pytest.fixture
def listing_query():
    """Multi-valued query mapping as produced by a URL query decoder."""
    return {
        "status": ["deployed"],
        "page": ["2"],
        "is_active": ["true"],
        "categories[]": ["abc", "def", "ghi"],
    }
