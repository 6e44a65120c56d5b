"""
Unit Test Layer Configuration

Structure:
    tests/unit/
    ├── golden/      Characterization of models
    └── tax_service/ Pure tax logic (fallback table, mappings, payloads)

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit -m golden -v       # By marker
"""
