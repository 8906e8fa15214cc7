"""
Graph utilities
Rendering and summary statistics for backprop computation graphs.
"""

import numpy as np
from typing import Dict, List
from collections import Counter

from .var import Value


def render(node: Value, indent: str = "\t") -> str:
    """
    Multi-line rendering of `node` and, recursively, of its operands.

    Shared subexpressions are rendered once under each consumer, so the
    output is a tree view of the DAG.
    """
    lines: List[str] = []
    stack = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        lines.append(indent * depth + current.display())
        for operand in reversed(current.operands):
            stack.append((operand, depth + 1))
    return "\n".join(lines)


def graph_summary(tape) -> Dict:
    """
    Statistics for the nodes recorded on `tape`.

    Args:
        tape: a Tape, e.g. the one yielded by use_tape()

    Returns:
        dict with node/edge counts, fan-in/fan-out and an op breakdown
    """
    nodes = tape.nodes
    n_nodes = len(nodes)
    if n_nodes == 0:
        return {}

    n_edges = sum(len(node.operands) for node in nodes)
    fan_ins = [len(node.operands) for node in nodes]

    # fan-out: only count consumers recorded on this tape
    index = {id(node): i for i, node in enumerate(nodes)}
    fan_outs = [0] * n_nodes
    for node in nodes:
        for operand in node.operands:
            i = index.get(id(operand))
            if i is not None:
                fan_outs[i] += 1

    op_counter = Counter(node.op.value for node in nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter),
    }


def print_graph_summary(tape, detailed: bool = False) -> Dict:
    """
    Print the summary of `tape`; with `detailed`, also list up to 100 nodes.

    Returns:
        the same dict as graph_summary()
    """
    summary = graph_summary(tape)
    if not summary:
        print("Empty computation graph")
        return summary

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {summary['nodes']:,}")
    print(f"Total edges:        {summary['edges']:,}")
    print(f"Max fan-in:         {summary['max_fan_in']}")
    print(f"Avg fan-in:         {summary['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {summary['max_fan_out']}")
    print(f"Avg fan-out:        {summary['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(summary['operations']).most_common(10):
        pct = 100.0 * count / summary['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        print()
        print("="*70)
        print("DETAILED NODE LIST (first 100 nodes)")
        print("="*70)
        index = {id(node): i for i, node in enumerate(tape.nodes)}
        for i, node in enumerate(tape.nodes[:100]):
            operand_info = ", ".join(
                f"Node{index[id(operand)]}" if id(operand) in index else "external"
                for operand in node.operands
            )
            print(f"Node {i:3d}: {node.op.value:12s} <- [{operand_info}]")

    print("="*70 + "\n")
    return summary
