"""
Test configuration — sets required env vars before any imports.
"""

import os

# Set dummy env vars so Settings() doesn't fail during test collection.
# The partner API is always mocked, so these are never used for real calls.
os.environ.setdefault("PARTNER_API_TOKEN", "test-partner-token")
os.environ.setdefault("PARTNER_API_BASE_URL", "https://partner.test/api")
os.environ.setdefault("WORKSPACE_API_BASE_URL", "https://workspace.test/api")
