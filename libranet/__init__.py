"""LibraNet - Core Application Package

This package contains the core catalog modules:
- Error kinds (errors.py)
- Input validation (validators.py)
- Item model (item.py)
- Catalog and fines ledger (catalog.py)
- Sample catalog contents (sample_data.py)
- Output rendering helpers (ui_helpers.py)
"""
