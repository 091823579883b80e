"""Preset example graphs offered by the front end.

Static reference data: nothing here is persisted or mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict


class GraphTemplate(BaseModel):
    """A named example graph in the editor's text format."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    nodes: str
    edges: str
    category: str

    def node_labels(self) -> list[str]:
        """Node labels from the comma-separated ``nodes`` field."""
        return [label.strip() for label in self.nodes.split(",") if label.strip()]

    def edge_pairs(self) -> list[tuple[str, str]]:
        """``(a, b)`` pairs from the newline-separated ``A-B`` lines."""
        pairs = []
        for line in self.edges.splitlines():
            a, sep, b = line.strip().partition("-")
            if sep and a.strip() and b.strip():
                pairs.append((a.strip(), b.strip()))
        return pairs


GRAPH_TEMPLATES: Mapping[str, GraphTemplate] = MappingProxyType(
    {
        "star-network": GraphTemplate(
            name="Star Network Topology",
            description="5G cell tower with connected devices",
            nodes="Tower, Device1, Device2, Device3, Device4, Device5",
            edges="Tower-Device1\nTower-Device2\nTower-Device3\nTower-Device4\nTower-Device5",
            category="Network Design",
        ),
        "ring-topology": GraphTemplate(
            name="Ring Network",
            description="Circular router network with redundancy",
            nodes="Router1, Router2, Router3, Router4",
            edges="Router1-Router2\nRouter2-Router3\nRouter3-Router4\nRouter4-Router1",
            category="Network Design",
        ),
        "complete-graph": GraphTemplate(
            name="Complete Graph K4",
            description="Fully connected mesh network",
            nodes="A, B, C, D",
            edges="A-B\nA-C\nA-D\nB-C\nB-D\nC-D",
            category="Graph Theory",
        ),
        "binary-tree": GraphTemplate(
            name="Binary Tree",
            description="Hierarchical data structure",
            nodes="Root, L1, R1, L2, R2, L3, R3",
            edges="Root-L1\nRoot-R1\nL1-L2\nL1-R2\nR1-L3\nR1-R3",
            category="Data Structures",
        ),
        "social-network": GraphTemplate(
            name="Social Network",
            description="Friend connections with influencer",
            nodes="Alice, Bob, Charlie, Diana, Eve, Frank",
            edges="Alice-Bob\nAlice-Charlie\nAlice-Diana\nBob-Charlie\nDiana-Eve\nDiana-Frank\nEve-Frank",
            category="Social Networks",
        ),
        "supply-chain": GraphTemplate(
            name="Supply Chain",
            description="Manufacturing and distribution network",
            nodes="Factory, Warehouse1, Warehouse2, Store1, Store2, Store3",
            edges=(
                "Factory-Warehouse1\nFactory-Warehouse2\nWarehouse1-Store1\n"
                "Warehouse1-Store2\nWarehouse2-Store2\nWarehouse2-Store3"
            ),
            category="Logistics",
        ),
    }
)


def get_template(key: str) -> GraphTemplate:
    if key not in GRAPH_TEMPLATES:
        raise KeyError(f"Template {key!r} not found")
    return GRAPH_TEMPLATES[key]


def list_templates(category: Optional[str] = None) -> dict[str, GraphTemplate]:
    """Templates in catalog order, optionally limited to one category."""
    return {
        key: template
        for key, template in GRAPH_TEMPLATES.items()
        if category is None or template.category == category
    }


def categories() -> list[str]:
    seen: list[str] = []
    for template in GRAPH_TEMPLATES.values():
        if template.category not in seen:
            seen.append(template.category)
    return seen
