"""
Contact Watchman

Watches an input directory for contact CSV files and converts them:
- Valid rows -> JSON output artifact
- Rejected rows -> JSON error artifact with per-row messages
"""

__version__ = "1.0.0"

__all__ = ["ingest", "models", "utils", "watchers"]
