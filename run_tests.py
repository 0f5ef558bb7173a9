#!/usr/bin/env python
"""
Test Runner
Run the whole test suite with pytest
"""
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))


def run_tests():
    """Discover and run all tests"""
    return pytest.main(["tests", "-v", *sys.argv[1:]])


if __name__ == "__main__":
    sys.exit(run_tests())
