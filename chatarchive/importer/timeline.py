"""Reconstruct one linear timeline from a conversation's node graph.

Exports keep every branch the user ever explored. The visible conversation
is the chain of parent links ending at ``current_node``; when that pointer
is missing or dangling, nodes are ordered by message timestamp instead.
"""

from chatarchive.importer.models import ExportConversation, ExportNode
from chatarchive.importer.timestamps import EPOCH, to_datetime


def walk_current_leaf(mapping: dict[str, ExportNode], leaf_id: str | None) -> list[ExportNode]:
    """Follow parent links up from leaf_id and return the path root-first.

    Stops at a node without a parent, at a parent id missing from the mapping,
    or when a node id repeats. Never visits more nodes than the mapping holds.
    """
    path: list[ExportNode] = []
    seen: set[str] = set()
    node_id = leaf_id
    while node_id and node_id not in seen and len(path) < len(mapping):
        node = mapping.get(node_id)
        if node is None:
            break
        path.append(node)
        seen.add(node_id)
        node_id = node.parent
    path.reverse()
    return path


def order_by_timestamp(mapping: dict[str, ExportNode]) -> list[ExportNode]:
    """Order every node by message create_time, ascending.

    Nodes without a usable timestamp come first. Equal or absent timestamps
    fall back to node id so the order is total.
    """

    def sort_key(node: ExportNode) -> tuple:
        ts = to_datetime(node.create_time)
        return (ts is not None, ts or EPOCH, node.id or "")

    return sorted(mapping.values(), key=sort_key)


def build_timeline(conversation: ExportConversation) -> list[ExportNode]:
    """Walk from the current leaf, falling back to timestamp order."""
    path = walk_current_leaf(conversation.mapping, conversation.current_node)
    if path:
        return path
    return order_by_timestamp(conversation.mapping)
