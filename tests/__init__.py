"""
Test Suite for the dataset analysis service

Package-level unit tests live beside each package; this directory holds
end-to-end CLI tests.
"""
