"""Transformation options for delivery URLs"""

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class TransformSpec:
    """Display options encoded into the transformation segment of a delivery URL.

    Each option that is set contributes one token; unset (or falsy) options
    contribute nothing. Tokens are always emitted as w, h, c, g, q, f so the
    same options always give the same URL.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    crop: Optional[str] = None
    gravity: Optional[str] = None
    quality: Optional[Union[str, int]] = None
    format: Optional[str] = None

    def tokens(self) -> List[str]:
        tokens = []
        if self.width:
            tokens.append(f"w_{self.width}")
        if self.height:
            tokens.append(f"h_{self.height}")
        if self.crop:
            tokens.append(f"c_{self.crop}")
        if self.gravity:
            tokens.append(f"g_{self.gravity}")
        if self.quality:
            tokens.append("q_auto" if self.quality == "auto" else f"q_{self.quality}")
        # f_auto on a public_id that already carries an extension yields a double-format URL
        if self.format and self.format != "auto":
            tokens.append(f"f_{self.format}")
        return tokens

    def segment(self) -> str:
        """Comma-joined tokens, or an empty string when nothing is set"""
        return ",".join(self.tokens())
