"""Schema annotation blocks — render, locate, merge, apply.

A managed block sits at the very top or very bottom of a model file:

    # == Schema Info
    #
    # Table name: users
    #
    #  id   :integer          not null, primary key
    #  name :string
    #

Anything outside the block is preserved untouched.
"""

from schema_annotator.annotation.locator import Location, locate
from schema_annotator.annotation.merge import MergeAction, decide, merge, strip
from schema_annotator.annotation.renderer import render

__all__ = ["Location", "MergeAction", "decide", "locate", "merge", "render", "strip"]
