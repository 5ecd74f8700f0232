"""Platform helpers (subprocess execution, file replacement)."""

from pushit.platform.files import replace_text
from pushit.platform.process import ProcessError, run

__all__ = ["ProcessError", "replace_text", "run"]
