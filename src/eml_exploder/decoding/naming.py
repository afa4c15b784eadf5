"""
Output filename assignment for leaf parts.

A declared filename always wins. Otherwise a name is synthesized as
"<radix>-<index><ext>" where radix is the boundary of the enclosing multipart
level and ext is the first extension registered for the part's media type.

Under FilenamePolicy.LITERAL every synthesized name at one level uses the
same index, so two unnamed leaves of the same type overwrite each other.
FilenamePolicy.UNIQUE counts the unnamed leaves of a level instead.
"""

from enum import Enum
from typing import Optional

from ..parsing.boundary_reader import Part
from ..parsing.media_type import extension_for


class FilenamePolicy(str, Enum):
    """How the index of a synthesized filename is chosen."""

    LITERAL = "literal"  # constant index, collisions possible
    UNIQUE = "unique"  # running counter per multipart level


def synthesize_name(radix: str, index: int, media_type: Optional[str]) -> str:
    """
    Build "<radix>-<index><ext>".

    Examples:
        >>> synthesize_name("frontier", 1, "text/html")
        'frontier-1.html'
        >>> synthesize_name("frontier", 1, None)
        'frontier-1'
    """
    return f"{radix}-{index}{extension_for(media_type)}"


class LevelNamer:
    """
    Filename source for the leaves of one multipart level.

    Args:
        radix: Boundary of the level
        policy: Index policy for synthesized names
        start_index: Literal index, or the first counter value
    """

    def __init__(self, radix: str, policy: FilenamePolicy = FilenamePolicy.LITERAL, start_index: int = 1):
        self.radix = radix
        self.policy = FilenamePolicy(policy)
        self.start_index = start_index
        self._next_index = start_index

    def name_for(self, part: Part, media_type: Optional[str]) -> str:
        """
        Resolve the output filename of a leaf.

        Args:
            part: Leaf part
            media_type: Parsed media type, None if missing or unparsable

        Returns:
            Declared filename verbatim, or a synthesized one
        """
        declared = part.get_filename()
        if declared:
            return declared

        if self.policy is FilenamePolicy.UNIQUE:
            index = self._next_index
            self._next_index += 1
        else:
            index = self.start_index
        return synthesize_name(self.radix, index, media_type)
