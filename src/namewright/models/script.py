"""Rename script model.

A rename script is the text of the renaming language together with the id
of the renamer strategy that owns it. A library can hold several named
scripts and pick one per run.
"""

import re
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

LEGACY_RENAMER_ID = "Legacy"

_NEWLINE = re.compile(r"\r\n|\r|\n")


class RenameScript(BaseModel):
    """A named rename script."""

    model_config = ConfigDict(frozen=True)

    name: str = "default"
    renamer_type: str = LEGACY_RENAMER_ID
    """Id of the renamer strategy this script is written for."""

    script: Optional[str] = None
    """Script text. None means the script is unavailable."""

    extra_data: Optional[str] = None

    @property
    def lines(self) -> List[str]:
        """Script text split on any newline convention."""
        if not self.script:
            return []
        return _NEWLINE.split(self.script)

    @classmethod
    def from_file(
        cls,
        path: Path,
        name: Optional[str] = None,
        renamer_type: str = LEGACY_RENAMER_ID,
    ) -> "RenameScript":
        """Load a script from a UTF-8 text file.

        Args:
            path: File to read.
            name: Script name, defaults to the file stem.
            renamer_type: Renamer strategy the script belongs to.
        """
        return cls(
            name=name or path.stem,
            renamer_type=renamer_type,
            script=path.read_text(encoding="utf-8"),
        )
