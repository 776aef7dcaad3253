################################################################################
# File Name: __init__.py
# Purpose/Description: Test package initialization
# Author: Michael Cornelison
# Creation Date: 2026-10-17
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
################################################################################

"""
Test package for the server bootstrap.

Run tests with:
    pytest tests/
    pytest tests/test_controller.py -v
"""
