import logging

from graphviz import Digraph

from scalargrad.engine import topological_order

logger = logging.getLogger(__name__)


def trace(root):
    nodes = topological_order(root)
    edges = [(child, node) for node in nodes for child in node.prev]
    return nodes, edges


def draw_dot(root, format="svg"):
    """Build a left-to-right Digraph of the graph ending at `root`.

    Each Scalar is a record `{ label | data | grad }`; nodes produced by an
    operation get a small op node feeding into them. Nothing is mutated.
    """
    dot = Digraph(format=format, graph_attr={"rankdir": "LR"})

    nodes, edges = trace(root)
    ids = {node: f"n{i}" for i, node in enumerate(nodes)}
    for node in nodes:
        uid = ids[node]
        dot.node(
            name=uid,
            label="{ %s | data %.4f | grad %.4f }" % (node.label or "", node.data, node.grad),
            shape="record",
        )
        if node.op is not None:
            dot.node(name=uid + "_op", label=str(node.op), shape="circle")
            dot.edge(uid + "_op", uid)

    for child, node in edges:
        dot.edge(ids[child], ids[node] + "_op")

    return dot


def render(root, path, format="svg"):
    dot = draw_dot(root, format=format)
    out = dot.render(outfile=path, cleanup=True)
    logger.info("wrote graph of %s to %s", root, out)
    return out
