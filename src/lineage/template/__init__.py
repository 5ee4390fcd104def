"""Template package — chain nodes, traversal and the local context.

Re-exports the public symbols so that ``from lineage.template import Template``
works without knowing the module layout.
"""

from lineage.template.core import Template
from lineage.template.chain import iter_chain, resolve_block, walk_chain
from lineage.template.local_context import LocalContext, LocalScope
from lineage.template.sources import EMPTY, Source, SourceKind

__all__ = [
    "EMPTY",
    "LocalContext",
    "LocalScope",
    "Source",
    "SourceKind",
    "Template",
    "iter_chain",
    "resolve_block",
    "walk_chain",
]
