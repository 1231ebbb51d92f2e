"""
Emogo - a local emotion log.

This package records how the user feels as timestamped entries in local
storage, shows the history newest first, exports it as shareable text and
clears it on request.
"""

__version__ = "0.1.0"
