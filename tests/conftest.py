"""
Shared pytest setup. app.core.config refuses to import without OPENAI_API_KEY,
so a dummy key is set before any test module imports the app.
"""

import os

os.environ.setdefault("OPENAI_API_KEY", "test-key")
