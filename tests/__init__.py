"""
Test suite for PLU Analyzer.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_analysis_service.py -v
"""
