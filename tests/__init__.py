"""Test package for Verdict chat core.

Structure:
    - unit/: Individual function and class tests
    - integration/: Controller, gateway, and store working together

Integration tests run the real gateway against an in-process fake of the
remote analysis service. Leverages pytest with pytest-check for soft assertions.
"""
