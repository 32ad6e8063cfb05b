"""Black Dragon Viewer installer for Arch Linux (Wine-based).

Core design goals:
- Fail-fast, strictly ordered steps
- Explicit configuration instead of process-global environment
- Pure templates for generated files
- Centralized logging
"""

__all__ = []
