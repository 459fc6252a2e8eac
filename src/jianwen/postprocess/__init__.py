"""Post-processing passes run after both parser passes.

- include: replace ``[@](path)`` and ``[@=name]`` blocks with their content
- footnotes: report references without a definition
- clone: deep copies for included subtrees

"""

from jianwen.postprocess.clone import clone_block, clone_node
from jianwen.postprocess.footnotes import check_footnotes
from jianwen.postprocess.include import IncludeContext, expand_includes

__all__ = [
    "IncludeContext",
    "check_footnotes",
    "clone_block",
    "clone_node",
    "expand_includes",
]
