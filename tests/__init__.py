"""
Test suite for the packing assistant.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_packing_calculator_service.py -v
"""
